import csv
import io
from django.conf import settings
from django.http import HttpResponse
import xlsxwriter
from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import landscape, letter

HEADERS = [
    "Member ID", "Member", "School", "Join Date", "Periods",
    "Overdue Savings", "Overdue Shares", "Pending Charges", "Total Overdue",
]


def _row(info):
    return [
        info.member_id,
        info.full_name,
        info.school_name,
        info.join_date.isoformat() if info.join_date else "",
        info.contribution_periods,
        float(info.overdue_savings_amount),
        float(info.total_overdue_shares),
        float(info.total_overdue_service_charges),
        float(info.total_overdue),
    ]


# ------------------------------
# CSV Export
# ------------------------------
def export_overdue_csv(report):
    response = HttpResponse(content_type="text/csv")
    response["Content-Disposition"] = f"attachment; filename=overdue_report_{report.as_at.isoformat()}.csv"
    writer = csv.writer(response)
    writer.writerow(HEADERS)
    for info in report.overdue_members:
        writer.writerow(_row(info))

    writer.writerow([])
    writer.writerow(["Share Details"])
    writer.writerow(["Member", "Share Type", "Monthly Commitment", "Expected", "Allocated", "Overdue"])
    for info in report.overdue_members:
        for d in info.overdue_shares_details:
            writer.writerow([
                info.full_name,
                d.share_type_name,
                float(d.monthly_committed_amount),
                float(d.total_expected_contribution),
                float(d.total_allocated_value),
                float(d.overdue_amount),
            ])
    return response


# ------------------------------
# XLSX Export
# ------------------------------
def export_overdue_xlsx(report):
    output = io.BytesIO()
    workbook = xlsxwriter.Workbook(output, {'in_memory': True})
    money = workbook.add_format({'num_format': '#,##0.00'})
    bold = workbook.add_format({'bold': True})

    worksheet = workbook.add_worksheet("Overdue Members")
    for col, header in enumerate(HEADERS):
        worksheet.write(0, col, header, bold)
    for row, info in enumerate(report.overdue_members, start=1):
        for col, value in enumerate(_row(info)):
            if col >= 5:
                worksheet.write_number(row, col, value, money)
            else:
                worksheet.write(row, col, value)

    details = workbook.add_worksheet("Share Details")
    detail_headers = ["Member", "Share Type", "Monthly Commitment", "Expected", "Allocated", "Overdue"]
    for col, header in enumerate(detail_headers):
        details.write(0, col, header, bold)
    row = 1
    for info in report.overdue_members:
        for d in info.overdue_shares_details:
            details.write(row, 0, info.full_name)
            details.write(row, 1, d.share_type_name)
            details.write_number(row, 2, float(d.monthly_committed_amount), money)
            details.write_number(row, 3, float(d.total_expected_contribution), money)
            details.write_number(row, 4, float(d.total_allocated_value), money)
            details.write_number(row, 5, float(d.overdue_amount), money)
            row += 1

    workbook.close()
    output.seek(0)
    response = HttpResponse(
        output.read(),
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    response["Content-Disposition"] = f"attachment; filename=overdue_report_{report.as_at.isoformat()}.xlsx"
    return response


# ------------------------------
# PDF Export
# ------------------------------
def export_overdue_pdf(report):
    symbol = settings.SACCO_CURRENCY_SYMBOL
    buffer = io.BytesIO()
    p = canvas.Canvas(buffer, pagesize=landscape(letter))
    width, height = landscape(letter)
    y = height - 50
    p.setFont("Helvetica-Bold", 12)
    p.drawString(30, y, f"Overdue Payments Report - As at {report.as_at.isoformat()}")
    y -= 30
    p.setFont("Helvetica", 9)

    for info in report.overdue_members:
        line = (
            f"{info.full_name} | {info.school_name} | Joined: {info.join_date} | "
            f"Savings: {symbol}{info.overdue_savings_amount:,.2f} | "
            f"Shares: {symbol}{info.total_overdue_shares:,.2f} | "
            f"Charges: {symbol}{info.total_overdue_service_charges:,.2f} | "
            f"Total: {symbol}{info.total_overdue:,.2f}"
        )
        p.drawString(30, y, line)
        y -= 15
        if y < 50:
            p.showPage()
            p.setFont("Helvetica", 9)
            y = height - 50
    p.save()
    pdf = buffer.getvalue()
    buffer.close()
    response = HttpResponse(pdf, content_type="application/pdf")
    response["Content-Disposition"] = f"attachment; filename=overdue_report_{report.as_at.isoformat()}.pdf"
    return response


def handle_export(fmt, report):
    if fmt == "csv":
        return export_overdue_csv(report)
    if fmt == "xlsx":
        return export_overdue_xlsx(report)
    if fmt == "pdf":
        return export_overdue_pdf(report)
    return None
