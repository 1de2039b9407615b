"""Templates to render reports in HTML."""
from functools import lru_cache
from typing import Any
from typing import Dict
from typing import Iterable
from typing import Optional

import jinja2
from markupsafe import Markup

DEFAULT_HEADER = "head_content.html"


@lru_cache(maxsize=1)
def get_render_environment() -> jinja2.Environment:
    loader = jinja2.PackageLoader("stackmerge.reporters")
    env = jinja2.Environment(loader=loader)

    def include_file(name: str) -> Markup:
        """Include a file from the templates directory without
        interpolating its contents"""
        source, *_ = loader.get_source(env, name)
        return Markup(source)

    env.globals["include_file"] = include_file
    return env


def render_report(
    *,
    kind: str,
    rows: Iterable[Dict[str, Any]],
    header: Optional[str] = None,
) -> str:
    env = get_render_environment()
    template = env.get_template(kind + ".html")
    return template.render(
        header=Markup(header) if header is not None else None,
        header_template=DEFAULT_HEADER,
        rows=rows,
    )
