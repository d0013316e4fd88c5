from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from app.core.config import settings

router = APIRouter(tags=["home"])

COLLECTIONS = (
    ("Subjects", "/api/v1/subjects"),
    ("Teachers", "/api/v1/teachers"),
    ("Students", "/api/v1/students"),
    ("Classes", "/api/v1/classes"),
)

_PAGE = """<html>
<head>
    <title>{title}</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 40px; }}
        .container {{ max-width: 800px; margin: 0 auto; }}
        .section {{ margin: 20px 0; padding: 15px; border: 1px solid #ddd; border-radius: 5px; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>{title}</h1>
        <p>REST endpoints for managing subjects, teachers, students, classes and enrollments.</p>
        <div class="section">
            <h2>API Documentation</h2>
            <ul>
                <li><a href="/docs">Swagger UI</a></li>
                <li><a href="/redoc">ReDoc</a></li>
                <li><a href="/openapi.json">OpenAPI JSON</a></li>
            </ul>
        </div>
        <div class="section">
            <h2>Endpoints</h2>
            <ul>
{links}
            </ul>
        </div>
    </div>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def home() -> str:
    """Landing page with links to the docs and each resource collection."""
    links = "\n".join(
        f'                <li><strong>{label}:</strong> <a href="{path}">{path}</a></li>'
        for label, path in COLLECTIONS
    )
    return _PAGE.format(title=settings.app_title, links=links)
