from django.urls import path
from .views import AdjustStockView, ProductPackageImpactView

app_name = "inventory"

urlpatterns = [
    # Stock Management Actions
    path("stock/adjust/", AdjustStockView.as_view(), name="stock-adjust"),
    # Package impact of a product's stock
    path(
        "package-impact/<str:product_id>/",
        ProductPackageImpactView.as_view(),
        name="product-package-impact",
    ),
]
