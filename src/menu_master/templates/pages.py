"""Full HTML documents around rendered menus and the menu error states."""

from menu_master.templates.base_template import escape


def render_document(title: str, body: str, lang: str = "en") -> str:
    """Wrap an HTML fragment in a complete document."""
    return (
        "<!DOCTYPE html>"
        f'<html lang="{escape(lang)}">'
        "<head>"
        '<meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1">'
        f"<title>{escape(title)}</title>"
        "</head>"
        f"<body>{body}</body>"
        "</html>"
    )


def render_not_found(reason: str | None) -> str:
    """Render the "menu not found" page.

    Args:
        reason: Why the link did not resolve, e.g. "restaurant not found"

    Returns:
        str: Complete HTML document
    """
    detail = f'<p class="menu-error-reason">{escape(reason.capitalize())}.</p>' if reason else ""
    body = (
        '<div class="menu-error card">'
        "<h3>Menu Not Found</h3>"
        "<p>This menu link is invalid or unpublished.</p>"
        f"{detail}"
        "</div>"
    )
    return render_document("Menu Not Found", body)


def render_unavailable(reason: str | None) -> str:
    """Render the page shown when the menu store could not be reached.

    Args:
        reason: Description of what failed to load

    Returns:
        str: Complete HTML document
    """
    detail = f'<p class="menu-error-reason">{escape(reason)}</p>' if reason else ""
    body = (
        '<div class="menu-error menu-unavailable card">'
        "<h3>Menu Temporarily Unavailable</h3>"
        "<p>We could not load this menu right now. Please refresh in a moment.</p>"
        f"{detail}"
        "</div>"
    )
    return render_document("Menu Unavailable", body)
