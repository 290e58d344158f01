from django.dispatch import Signal

# Sent after a stock adjustment commits.
# kwargs: product_ids (list of str), reason (str), reference_id (str)
stock_changed = Signal()
