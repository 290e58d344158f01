from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class CoreBackendConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core_backend"

    def ready(self):
        """
        Warm package availability on startup when enabled, so the first
        register lookups after a deploy are served from cache.
        """
        from packages.conf import get_availability_setting

        if not get_availability_setting("WARM_ON_STARTUP"):
            logger.debug("Package availability warming on startup disabled")
            return
        self._startup_cache_warming()

    def _startup_cache_warming(self):
        try:
            from threading import Thread
            import time

            def warm_caches_background():
                """Background warming so startup is not blocked"""
                try:
                    # Wait a moment for Django to fully initialize
                    time.sleep(2)
                    from packages.tasks import warm_package_availability_cache

                    result = warm_package_availability_cache()
                    logger.info(f"Startup package availability warming: {result}")
                except Exception as e:
                    logger.error(f"Startup package availability warming failed: {e}")

            Thread(target=warm_caches_background, daemon=True).start()
            logger.info("Background package availability warming initiated on startup")
        except Exception as e:
            logger.error(f"Failed to initiate startup cache warming: {e}")
