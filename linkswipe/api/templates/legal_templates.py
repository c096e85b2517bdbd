"""
HTML templates for the static legal pages.
"""

from html import escape
from typing import Dict, List, Optional, Tuple

LAST_UPDATED = "August 31, 2025"

# Each section is (heading or None, paragraphs, bullet items)
Section = Tuple[Optional[str], List[str], List[str]]


def get_legal_documents(app_name: str, price_label: str, contact_email: str) -> Dict[str, Dict]:
    """Legal documents keyed by URL slug."""
    return {
        "terms": {
            "title": "Terms of Use",
            "sections": [
                (
                    "Definitions and Scope",
                    [
                        f"These “Terms of Use” apply to all users of {app_name} (the “Platform”). "
                        "Anyone who accesses the Platform, creates a profile, shares a link, or views "
                        "content accepts these terms."
                    ],
                    [],
                ),
                (
                    "Acceptance of Terms",
                    ["By using the Platform, you agree to the following:"],
                    [
                        "You are over 18 years of age.",
                        "You act on your own behalf and accept responsibility for your content.",
                        "You have read and accepted the Privacy Policy and other legal documents.",
                    ],
                ),
                (
                    "User Content and Responsibility",
                    ["Content uploaded by users must not violate laws, third-party rights, or these terms."],
                    [],
                ),
                (
                    "Prohibited Content",
                    [],
                    [
                        "Hate speech, violent or illegal content.",
                        "Pornographic or sexually explicit content.",
                        "Child abuse, drugs, weapons, or other illegal activities.",
                    ],
                ),
                (
                    "Payments and Refunds",
                    [
                        f"Profiles that are promoted pay {price_label} via Gumroad. "
                        "Payments are non-refundable except as required by law."
                    ],
                    [],
                ),
            ],
            "footer": [f"Last Updated: {LAST_UPDATED}"],
        },
        "privacy": {
            "title": "Privacy & Data Protection",
            "sections": [
                (
                    "Data Collected",
                    [
                        "We collect profile information (name, photo, social links), IP and session info. "
                        f"Payment is processed by Gumroad and not stored by {app_name}."
                    ],
                    [],
                ),
                (
                    "Purpose",
                    ["Data is used to display profiles, operate the service and comply with legal obligations."],
                    [],
                ),
                (
                    "Sharing & Retention",
                    [
                        "Personal data is not sold. It may be shared for legal requests. "
                        "Users can request deletion via email."
                    ],
                    [],
                ),
            ],
            "footer": [f"Contact: {contact_email}", f"Last Updated: {LAST_UPDATED}"],
        },
        "disclaimer": {
            "title": "Legal Disclaimer & Copyright",
            "sections": [
                (
                    None,
                    [
                        f"Users are responsible for the content they upload. {app_name} is not liable "
                        "for user-generated content.",
                        "Uploaded content must not infringe copyrights. Complaints may lead to removal.",
                        "Logos, brand elements and other IP remain the property of their owners.",
                    ],
                    [],
                ),
            ],
            "footer": [f"Last Updated: {LAST_UPDATED}"],
        },
    }


def _render_section(section: Section) -> str:
    heading, paragraphs, items = section
    parts = []
    if heading:
        parts.append(f"<h3>{escape(heading)}</h3>")
    parts.extend(f"<p>{escape(text)}</p>" for text in paragraphs)
    if items:
        parts.append("<ul>" + "".join(f"<li>{escape(item)}</li>" for item in items) + "</ul>")
    return "\n            ".join(parts)


def _page(title: str, app_name: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)} - {escape(app_name)}</title>
    <style>
        body {{
            font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            min-height: 100vh;
            margin: 0;
            padding: 2rem 1rem;
            color: #FFFFFF;
            background: linear-gradient(135deg, #d946ef, #0ea5e9, #34d399);
        }}
        .container {{
            max-width: 42rem;
            margin: 0 auto;
            padding: 1.5rem;
            border-radius: 1.5rem;
            background: rgba(0, 0, 0, 0.35);
        }}
        h2 {{ margin-top: 0; }}
        h3 {{ margin-bottom: 0.25rem; }}
        p, li {{ font-size: 0.9rem; line-height: 1.6; }}
        .meta {{ font-size: 0.75rem; opacity: 0.7; }}
        a {{ color: #FFFFFF; }}
    </style>
</head>
<body>
    <div class="container">
        {body}
        <p><a href="/">&larr; Back to {escape(app_name)}</a></p>
    </div>
</body>
</html>"""


def get_legal_template(document: Dict, app_name: str) -> str:
    """
    Generate HTML for one legal document.

    Args:
        document: Entry from get_legal_documents
        app_name: Site title

    Returns:
        Complete HTML document
    """
    sections = "\n            ".join(_render_section(s) for s in document["sections"])
    footer = "".join(f'<p class="meta">{escape(line)}</p>' for line in document["footer"])
    body = f"""<h2>{escape(document["title"])}</h2>
            {sections}
            {footer}"""
    return _page(document["title"], app_name, body)


def get_not_found_template(app_name: str) -> str:
    """Generate HTML for an unknown legal document."""
    return _page("Not Found", app_name, "<h2>Page not found</h2>")
