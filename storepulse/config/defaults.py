DEFAULT_CONFIG = {
    # -----------------------------
    # STORE
    # -----------------------------
    "store": {
        "id": "default",
    },

    # -----------------------------
    # ORDER COLUMNS (OPTIONAL OVERRIDES)
    # -----------------------------
    # None = resolve from known aliases
    "columns": {
        "date": None,
        "revenue": None,
        "units": None,
        "customer": None,
        "order_id": None,
        "shipping_days": None,
    },

    # -----------------------------
    # REPORT
    # -----------------------------
    "report": {
        "month": None,     # None = every month with orders
        "year": None,
    },

    # -----------------------------
    # VISUALS
    # -----------------------------
    "visuals": {
        "enabled": False,  # seasonality.png
    },

    "output_dir": "runs",

    "logging": {
        "level": "INFO",
    },
}
