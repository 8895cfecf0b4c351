from __future__ import annotations

import html
import json
from typing import Any

from skillsphere.ai.types import CompletionClient
from skillsphere.schemas.community import PortfolioSite, PortfolioSiteRequest
from skillsphere.services.completion import run_json_completion
from skillsphere.services.outcome import Outcome
from skillsphere.store.base import KeyValueStore
from skillsphere.store.records import get_persona, list_projects

THEMES = {
    "light": {"background": "#ffffff", "text": "#1f2937", "accent": "#7c3aed", "card": "#f5f3ff"},
    "dark": {"background": "#0a0a14", "text": "#e5e7eb", "accent": "#a78bfa", "card": "#1e1b4b"},
}


def _link(url: str, label: str) -> str:
    if not url:
        return ""
    return f'<a href="{html.escape(url, quote=True)}" rel="noopener">{html.escape(label)}</a>'


def _project_card(project: dict[str, Any]) -> str:
    techs = "".join(f"<li>{html.escape(str(t))}</li>" for t in project.get("technologies") or [])
    links = " ".join(
        part
        for part in (
            _link(project.get("githubUrl") or "", "Source"),
            _link(project.get("liveUrl") or "", "Live demo"),
        )
        if part
    )
    return (
        '<article class="project">'
        f"<h3>{html.escape(str(project.get('title') or 'Untitled project'))}</h3>"
        f"<p>{html.escape(str(project.get('description') or ''))}</p>"
        f'<ul class="tech">{techs}</ul>'
        f"<p>{links}</p>"
        "</article>"
    )


def render_portfolio_html(
    *,
    name: str,
    headline: str,
    about: str,
    projects: list[dict[str, Any]],
    theme: str = "light",
) -> str:
    colors = THEMES.get(theme, THEMES["light"])
    cards = "\n".join(_project_card(p) for p in projects) or "<p>Projects coming soon.</p>"
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{html.escape(name)} | Portfolio</title>
<style>
body {{ margin: 0; font-family: system-ui, sans-serif; background: {colors["background"]}; color: {colors["text"]}; }}
header, main {{ max-width: 960px; margin: 0 auto; padding: 2rem 1.5rem; }}
h1 {{ color: {colors["accent"]}; margin-bottom: 0.25rem; }}
.project {{ background: {colors["card"]}; border-radius: 12px; padding: 1.25rem; margin-bottom: 1rem; }}
.tech {{ display: flex; flex-wrap: wrap; gap: 0.5rem; list-style: none; padding: 0; }}
.tech li {{ border: 1px solid {colors["accent"]}; border-radius: 999px; padding: 0.1rem 0.6rem; font-size: 0.85rem; }}
a {{ color: {colors["accent"]}; }}
</style>
</head>
<body>
<header>
<h1>{html.escape(name)}</h1>
<p>{html.escape(headline)}</p>
</header>
<main>
<section id="about"><h2>About</h2><p>{html.escape(about)}</p></section>
<section id="projects"><h2>Projects</h2>
{cards}
</section>
</main>
</body>
</html>"""


def portfolio_site_fallback(
    payload: PortfolioSiteRequest,
    projects: list[dict[str, Any]],
    persona: dict[str, Any] | None,
) -> dict[str, Any]:
    persona = persona or {}
    name = payload.name or persona.get("name") or "My Portfolio"
    headline = payload.headline or persona.get("title") or "Builder of useful things"
    about = persona.get("summary") or "A selection of projects I have designed and built."
    return {
        "html": render_portfolio_html(name=name, headline=headline, about=about, projects=projects, theme=payload.theme),
        "theme": payload.theme,
    }


def generate_portfolio_site(
    client: CompletionClient,
    store: KeyValueStore,
    user_id: str,
    payload: PortfolioSiteRequest,
) -> Outcome:
    """Turn the user's saved projects (and persona, when there is one) into a one-page site."""
    projects = list_projects(store, user_id)
    persona = get_persona(store, user_id)
    project_lines = json.dumps(
        [
            {
                "title": p.get("title"),
                "description": p.get("description"),
                "technologies": p.get("technologies"),
                "githubUrl": p.get("githubUrl"),
                "liveUrl": p.get("liveUrl"),
            }
            for p in projects
        ],
        ensure_ascii=False,
    )
    user_prompt = f"""Design a single-page personal portfolio website.
Name: {payload.name or (persona or {}).get("name") or "Not provided"}
Headline: {payload.headline or (persona or {}).get("title") or "Not provided"}
About: {(persona or {}).get("summary") or "Not provided"}
Theme: {payload.theme}
Projects (JSON): {project_lines}

Provide JSON with:
1. html: A complete, self-contained HTML5 document with inline CSS and no external scripts
2. theme: "{payload.theme}"

Format as valid JSON only."""
    return run_json_completion(
        client,
        endpoint="portfolio-site",
        system_prompt="You are a web designer who builds clean developer portfolios. Respond only with valid JSON.",
        user_prompt=user_prompt,
        fallback=portfolio_site_fallback(payload, projects, persona),
        response_model=PortfolioSite,
    )
