from pathlib import Path

import pytest

from sitegen.config import Settings

POST_TEMPLATE = "<title>{{ title }}</title>\n{{ content }}\n"
INDEX_TEMPLATE = (
    "<h1>{{ title }}</h1>\n"
    "{% for post in posts %}{{ post.date }}|{{ post.slug }}|{{ post.title }}|{{ post.link }}\n{% endfor %}"
)


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path):
    """A project skeleton with minimal templates and an empty content tree."""
    write(tmp_path / "templates" / "post.html", POST_TEMPLATE)
    write(tmp_path / "templates" / "index.html", INDEX_TEMPLATE)
    (tmp_path / "blog" / "posts").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def settings(site):
    return Settings(
        content_dir=site / "blog",
        output_dir=site / "dist",
        templates_dir=site / "templates",
    )
