"""
Theme constants — colors, chart layout, Bootstrap overrides.
Import from here instead of hardcoding colors anywhere.
"""

# ── Color Palette ────────────────────────────────────────────────────────────
BG = "#120d0a"
CARD = "#1e1611"
CARD2 = "#2a1f18"
GREEN = "#2ecc71"
RED = "#e74c3c"
BLUE = "#3498db"
ORANGE = "#f39c12"
PURPLE = "#9b59b6"
TEAL = "#1abc9c"
PINK = "#e91e8f"
WHITE = "#ffffff"
GRAY = "#aaaaaa"
DARKGRAY = "#666666"
CYAN = "#00d4ff"

# ── Order status colors ──────────────────────────────────────────────────────
STATUS_COLORS = {
    "pending": ORANGE,
    "processing": BLUE,
    "shipped": PURPLE,
    "delivered": GREEN,
    "cancelled": RED,
}

STATUS_OPTIONS = [
    {"label": "Pending", "value": "pending"},
    {"label": "Processing", "value": "processing"},
    {"label": "Shipped", "value": "shipped"},
    {"label": "Delivered", "value": "delivered"},
    {"label": "Cancelled", "value": "cancelled"},
]

PAYMENT_OPTIONS = [
    {"label": "UPI", "value": "upi"},
    {"label": "Cash", "value": "cash"},
    {"label": "Card", "value": "card"},
    {"label": "Bank Transfer", "value": "bank_transfer"},
]

# ── Expense category colors ──────────────────────────────────────────────────
EXPENSE_CATEGORY_LABELS = {
    "raw_materials": "Raw Materials",
    "packaging": "Packaging",
    "delivery": "Delivery & Logistics",
    "utilities": "Utilities",
    "labor": "Labor",
    "marketing": "Marketing",
    "maintenance": "Maintenance",
    "other": "Other",
}

INVOICE_STATUS_COLORS = {"paid": GREEN, "partial": ORANGE, "unpaid": RED}

# ── Plotly Chart Layout ──────────────────────────────────────────────────────
CHART_LAYOUT = dict(
    template="plotly_dark",
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font={"color": WHITE},
    margin=dict(t=50, b=30, l=60, r=20),
)

# ── Sidebar Dimensions ───────────────────────────────────────────────────────
SIDEBAR_WIDTH = "250px"
CONTENT_MARGIN = "266px"  # sidebar + gap

TOAST_STYLE = {"position": "fixed", "top": 20, "right": 20, "zIndex": 9999}
