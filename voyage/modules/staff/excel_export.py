"""Export staff lists to Excel (XLSX)."""

from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font

from voyage.core.auth.models import ROLE_LABELS, User, UserRole

HEADERS = ["Name", "Email", "Mobile", "Role", "Branch", "Active", "Last Login"]


def export_staff(users: list[User]) -> bytes:
    """One row per staff member; users must have ``branch`` loaded."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Staff"
    for col, header in enumerate(HEADERS, start=1):
        ws.cell(1, col, header).font = Font(bold=True)

    for row, user in enumerate(users, start=2):
        last_login = user.last_login_at.replace(tzinfo=None) if user.last_login_at else None
        values = [
            user.name,
            user.email,
            user.mobile1,
            ROLE_LABELS.get(UserRole(user.role), user.role),
            user.branch.branch_name if user.branch else None,
            "Yes" if user.is_active else "No",
            last_login,
        ]
        for col, value in enumerate(values, start=1):
            ws.cell(row, col, value)

    for col, width in zip("ABCDEFG", (25, 30, 15, 14, 25, 8, 20)):
        ws.column_dimensions[col].width = width

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()
