import io
from datetime import datetime
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from foodorder.utilities.constants import DATE_FORMAT, DISPLAY_DATE_FORMAT


def _display_date(value: str) -> str:
    try:
        return datetime.strptime(value, DATE_FORMAT).strftime(DISPLAY_DATE_FORMAT)
    except ValueError:
        return value


def generate_pdf_for_plan(plan):
    """Generate a one-page PDF: Item / Cost rows followed by Target / Actual / Remaining."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"Order Plan – {_display_date(plan.date)}", styles["Title"]),
        Spacer(1, 16),
    ]

    data = [["Item", "Cost"]]
    for entry in plan.entries:
        data.append([entry.food_item_name or "-", f"${(entry.food_item_cost or 0.0):.2f}"])
    totals_start = len(data)
    data.append(["Target Budget", f"${plan.target_cost:.2f}"])
    data.append(["Actual Cost", f"${plan.actual_cost:.2f}"])
    data.append(["Remaining", f"${plan.remaining:.2f}"])

    table = Table(data, repeatRows=1, colWidths=[360, 120])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#FF9800")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (1,0), (1,-1), "RIGHT"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("FONTNAME", (0,totals_start), (-1,-1), "Helvetica-Bold"),
        ("LINEABOVE", (0,totals_start), (-1,totals_start), 1, colors.black),
        ("TEXTCOLOR", (1,-1), (1,-1), colors.red if plan.remaining < 0 else colors.darkcyan),
        ("GRID", (0,0), (-1,totals_start - 1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
