"""
pdf_reports.py — GST tax invoice and executive summary as PDF bytes.

Both documents are drawn straight onto a reportlab canvas held in memory so
the Dash callbacks can hand the bytes to dcc.send_bytes.
"""

import io
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from khakhra_dashboard import config
from khakhra_dashboard.calculations import calculate_order_revenue
from khakhra_dashboard.export import summary_records
from khakhra_dashboard.formatting import format_currency, format_date

# Standard PDF fonts have no rupee glyph.
PDF_CURRENCY = "Rs."
LEFT = 25
BOTTOM_MARGIN = 60


def _money(value):
    return format_currency(value, currency=PDF_CURRENCY)


def invoice_lines(state, order):
    """[product, qty, rate, GST %, amount incl. GST] per order item."""
    rows = []
    for item in order.items:
        product = state.find_product(item.product_id)
        rate = product.gst_rate if product else 0
        amount = item.unit_price * item.quantity
        rows.append([
            product.name if product else item.product_id,
            str(item.quantity),
            _money(item.unit_price),
            f"{rate * 100:.0f}%",
            _money(amount + amount * rate),
        ])
    return rows


def _table(c, y, headers, rows, x, right_cols=()):
    """Draw a header line plus rows; starts a new page when the page runs out."""
    width, height = A4

    def _header(y):
        c.setFont("Helvetica-Bold", 9)
        for i, h in enumerate(headers):
            if i in right_cols:
                c.drawRightString(x[i], y, h)
            else:
                c.drawString(x[i], y, h)
        y -= 8
        c.line(LEFT, y, width - LEFT, y)
        c.setFont("Helvetica", 9)
        return y - 12

    y = _header(y)
    for row in rows:
        if y < BOTTOM_MARGIN:
            c.showPage()
            y = _header(height - 40)
        for i, cell in enumerate(row):
            if i in right_cols:
                c.drawRightString(x[i], y, cell)
            else:
                c.drawString(x[i], y, cell)
        y -= 16
    return y


def invoice_pdf_bytes(state, invoice_id) -> Optional[bytes]:
    """Tax invoice for one invoice; None if the invoice or its order is gone."""
    invoice = state.find_invoice(invoice_id)
    order = state.find_order(invoice.order_id) if invoice else None
    if order is None:
        return None
    customer = state.find_customer(order.customer_id)

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    right = width - LEFT
    y = height - 30

    # ================= COMPANY HEADER =================
    c.setFont("Helvetica-Bold", 16)
    c.drawString(LEFT, y, config.BUSINESS_NAME)
    c.setFont("Helvetica-Bold", 14)
    c.drawRightString(right, y, "TAX INVOICE")
    y -= 16
    c.setFont("Helvetica", 9)
    c.drawString(LEFT, y, f"GSTIN: {config.BUSINESS_GSTIN}")
    y -= 14
    c.line(LEFT, y, right, y)
    y -= 18

    # ================= INVOICE DETAILS =================
    c.setFont("Helvetica", 10)
    c.drawString(LEFT, y, f"Invoice #: {invoice.invoice_number}")
    c.drawRightString(right, y, f"Invoice Date: {format_date(invoice.issued_on)}")
    y -= 14
    c.drawString(LEFT, y, f"Order #: {order.order_number}")
    c.drawRightString(right, y, f"Due Date: {format_date(invoice.due_date)}")
    y -= 22

    # ================= CUSTOMER =================
    c.setFont("Helvetica-Bold", 10)
    c.drawString(LEFT, y, "Bill To:")
    y -= 14
    c.setFont("Helvetica", 10)
    c.drawString(LEFT, y, customer.name if customer else order.customer_id)
    y -= 12
    if customer and customer.gst_number:
        c.drawString(LEFT, y, f"GST: {customer.gst_number}")
        y -= 12
    if customer and customer.phone:
        c.drawString(LEFT, y, customer.phone)
        y -= 12
    y -= 14

    # ================= ITEMS =================
    y = _table(c, y, ["Product", "Qty", "Rate", "GST", "Amount"], invoice_lines(state, order),
               [LEFT, 330, 400, 450, right], right_cols=(1, 2, 3, 4))

    # ================= TOTALS =================
    if y < BOTTOM_MARGIN + 50:
        c.showPage()
        y = height - 40
    y -= 10
    c.line(330, y, right, y)
    y -= 18
    c.setFont("Helvetica", 10)
    c.drawRightString(450, y, "Sub Total:")
    c.drawRightString(right, y, _money(calculate_order_revenue(order)))
    y -= 14
    c.drawRightString(450, y, "GST:")
    c.drawRightString(right, y, _money(invoice.gst_amount))
    y -= 16
    c.setFont("Helvetica-Bold", 11)
    c.drawRightString(450, y, "Total:")
    c.drawRightString(right, y, _money(invoice.amount))

    c.showPage()
    c.save()
    return buffer.getvalue()


def summary_pdf_bytes(state) -> bytes:
    """Executive summary: headline metrics and low-stock batches."""
    overview, low_stock = summary_records(state)

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    y = height - 30

    c.setFont("Helvetica-Bold", 16)
    c.drawString(LEFT, y, f"{config.BUSINESS_NAME} - Executive Summary")
    y -= 30

    rows = [[metric, value.replace("₹", f"{PDF_CURRENCY} ")] for metric, value in overview]
    y = _table(c, y, ["Metric", "Value"], rows, [LEFT, 300], right_cols=(1,))
    y -= 20

    c.setFont("Helvetica-Bold", 11)
    c.drawString(LEFT, y, "Low Stock Finished Goods")
    y -= 18
    if low_stock:
        _table(c, y, ["Batch", "Product", "Quantity", "Reorder Level"], [list(r) for r in low_stock],
               [LEFT, 150, 420, width - LEFT], right_cols=(2, 3))
    else:
        c.setFont("Helvetica", 9)
        c.drawString(LEFT, y, "No batches at reorder level.")

    c.showPage()
    c.save()
    return buffer.getvalue()


def invoice_filename(invoice):
    return f"{invoice.invoice_number}.pdf"


SUMMARY_FILENAME = "khakhra-summary.pdf"
