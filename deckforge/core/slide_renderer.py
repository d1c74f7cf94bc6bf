"""
Slide Renderer for deckforge

The merge point of the pipeline: one SlideRecommendation plus its layout,
assets and style become a Slidev-style markdown slide.

    ---
    layout: default
    class: '<pattern name>'
    ---

    <style> theme CSS + layout container CSS </style>

    <body from one of six templates: hero, problem, solution, evidence,
     action, default>

Rendering is a pure function of its inputs. All text placed into HTML is
escaped.
"""

from html import escape
from typing import Callable, Dict, List, Optional

from deckforge.core.content_analyzer import optimize_cognitive_load
from deckforge.models.assets import AssetMetadata, AssetRecommendation
from deckforge.models.content import SlideRecommendation
from deckforge.models.layout import LayoutRecommendation
from deckforge.models.style import StyleRecommendation


SLIDE_TITLES: Dict[str, str] = {
    "hero": "Strategic Overview",
    "problem": "Current Challenges",
    "solution": "Our Solution",
    "evidence": "Proven Results & Impact",
    "action": "Next Steps Forward",
    "summary": "Key Takeaways",
}
DEFAULT_TITLE = "Key Information"


def slide_title(slide_type) -> str:
    """Fixed title for a slide type; unknown types get 'Key Information'."""
    key = str(getattr(slide_type, "value", slide_type) or "").strip().lower()
    return SLIDE_TITLES.get(key, DEFAULT_TITLE)


def _image(asset: Optional[AssetMetadata], css_class: str, indent: str = "") -> str:
    if asset is None:
        return ""
    return (
        f'{indent}<img src="{escape(asset.url)}" alt="{escape(asset.alt_text)}" '
        f'class="{css_class}" />'
    )


def _hero(title: str, points: List[str], asset: Optional[AssetMetadata]) -> str:
    highlights = "\n".join(f'    <div class="highlight-item">{escape(point)}</div>' for point in points)
    return f"""
<div class="slide-header slide-header--hero">
  <h1>{escape(title)}</h1>
</div>

<div class="hero-content">
{_image(asset, "hero-image", "  ")}
  <div class="hero-highlights">
{highlights}
  </div>
</div>
"""


def _problem(title: str, points: List[str], asset: Optional[AssetMetadata]) -> str:
    items = "\n".join(f"      <li>{escape(point)}</li>" for point in points)
    return f"""
<div class="slide-header slide-header--content">
  <h1>{escape(title)}</h1>
</div>

<div class="content-split">
  <div class="problem-statement">
    <ul>
{items}
    </ul>
  </div>

  <div class="problem-visual">
{_image(asset, "problem-image", "    ")}
  </div>
</div>
"""


def _solution(title: str, points: List[str], asset: Optional[AssetMetadata]) -> str:
    items = "\n".join(
        f'  <div class="solution-item">\n'
        f'    <h3>Step {index}</h3>\n'
        f'    <p>{escape(point)}</p>\n'
        f'  </div>'
        for index, point in enumerate(points, start=1)
    )
    visual = ""
    if asset is not None:
        visual = f'\n<div class="solution-visual">\n{_image(asset, "solution-image", "  ")}\n</div>\n'
    return f"""
<div class="slide-header slide-header--content">
  <h1>{escape(title)}</h1>
</div>

<div class="solution-grid">
{items}
</div>
{visual}"""


def _evidence(title: str, points: List[str], asset: Optional[AssetMetadata]) -> str:
    rows = "\n".join(
        f'        <tr>\n'
        f'          <td class="data-table--cell font-bold">{escape(point)}</td>\n'
        f'          <td class="data-table--cell text-center">Baseline</td>\n'
        f'          <td class="data-table--cell text-center text-accent font-bold">Improved</td>\n'
        f'        </tr>'
        for point in points
    )
    visual = ""
    if asset is not None:
        visual = f'\n  <div class="evidence-visual">\n{_image(asset, "evidence-image", "    ")}\n  </div>'
    return f"""
<div class="slide-header slide-header--content">
  <h1>{escape(title)}</h1>
</div>

<div class="evidence-container">
  <div class="data-table">
    <table>
      <thead>
        <tr class="data-table--header">
          <th>Metric</th>
          <th>Before</th>
          <th>After</th>
        </tr>
      </thead>
      <tbody>
{rows}
      </tbody>
    </table>
  </div>{visual}
</div>
"""


def _action(title: str, points: List[str], asset: Optional[AssetMetadata]) -> str:
    steps = "\n".join(
        f'  <div class="action-item">\n'
        f'    <div class="step-number">{index}</div>\n'
        f'    <div class="step-content"><p>{escape(point)}</p></div>\n'
        f'  </div>'
        for index, point in enumerate(points, start=1)
    )
    return f"""
<div class="slide-header slide-header--content">
  <h1>{escape(title)}</h1>
</div>

<div class="action-steps">
{steps}
</div>

<div class="call-to-action">
  <p>{escape(points[0]) if points else "Let's get started"}</p>
</div>
"""


def _default(title: str, points: List[str], asset: Optional[AssetMetadata]) -> str:
    items = "\n".join(f"    <li>{escape(point)}</li>" for point in points)
    visual = ""
    if asset is not None:
        visual = f'\n  <div class="content-visual">\n{_image(asset, "content-image", "    ")}\n  </div>'
    return f"""
<div class="slide-header slide-header--content">
  <h1>{escape(title)}</h1>
</div>

<div class="slide-content">
  <ul>
{items}
  </ul>{visual}
</div>
"""


_TEMPLATES: Dict[str, Callable[[str, List[str], Optional[AssetMetadata]], str]] = {
    "hero": _hero,
    "problem": _problem,
    "solution": _solution,
    "evidence": _evidence,
    "action": _action,
}


def render_slide_markdown(
    recommendation: SlideRecommendation,
    layout: LayoutRecommendation,
    assets: AssetRecommendation,
    style: StyleRecommendation,
    max_points: int = 7
) -> str:
    """
    Render one slide.

    Args:
        recommendation: Slide type and talking points
        layout: Chosen layout (front matter class + container CSS)
        assets: Curated assets; the top one is shown
        style: Composed style (theme CSS)
        max_points: Cap on rendered talking points

    Returns:
        Slide markdown with front matter and a <style> block
    """
    slide_type = str(getattr(recommendation.slide_type, "value", recommendation.slide_type))
    points = optimize_cognitive_load(recommendation.content_points, max_points)
    template = _TEMPLATES.get(slide_type, _default)

    header = (
        "---\n"
        "layout: default\n"
        f"class: '{layout.pattern.name}'\n"
        "---\n"
        "\n"
        "<style>\n"
        f"{style.css_framework.strip()}\n"
        "\n"
        f"{layout.css_framework.strip()}\n"
        "</style>\n"
    )
    return header + template(slide_title(slide_type), points, assets.primary_asset)
