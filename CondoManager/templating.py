from pathlib import Path

from fastapi.templating import Jinja2Templates
from starlette.responses import RedirectResponse

from CondoManager.utils import format_display_date

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["display_date"] = format_display_date


def render(request, name: str, context=None, status_code: int = 200):
    """
    Render a named view.

    Args:
        request (Request): The incoming request.
        name (str): Template name without the `.html` suffix.
        context (dict, optional): Data handed to the template.
        status_code (int): HTTP status of the response.

    Returns:
        TemplateResponse: The rendered HTML response.
    """
    return templates.TemplateResponse(
        request, f"{name}.html", context or {}, status_code=status_code
    )


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=302)
