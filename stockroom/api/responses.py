"""Response helpers shared by the endpoint modules"""

from fastapi import Response


def csv_response(content: str, filename: str) -> Response:
    """CSV text as a file download"""
    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
