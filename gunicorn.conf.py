"""Gunicorn config for deployment."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8070')}"

# One process owns the in-memory store and its state file.
workers = 1
threads = int(os.environ.get("GUNICORN_THREADS", 4))
timeout = 60


def post_worker_init(worker):
    """Load the store as soon as the worker starts, not on the first request."""
    from khakhra_dashboard.data_state import get_store

    store = get_store()
    state = store.state
    worker.log.info(
        "Store ready from %s: %d orders, %d invoices, %d batches",
        store.path, len(state.orders), len(state.invoices), len(state.inventory.finished_goods),
    )
