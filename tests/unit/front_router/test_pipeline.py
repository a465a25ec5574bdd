"""Unit tests for the file pipeline and standalone build."""

import asyncio
import json

import pytest

from front_router.errors import ConfigurationError, PipelineError
from front_router.pipeline import (
    BuildResult,
    RoutePipeline,
    SourceFile,
    _glob_base,
    build,
    iter_source_files,
)
from front_router.router import FrontRouter

HOME_ROUTE = json.dumps(
    {"name": "home", "url": "/", "path": "home.html"}, separators=(",", ":")
)
PARENT_ROUTE = json.dumps(
    {"name": "parent", "url": "/parent", "path": "parent.html"}, separators=(",", ":")
)


class TestTransform:
    """Tests for RoutePipeline.transform."""

    def test_registers_route_and_strips_front_matter(self):
        """Front matter becomes a route; the body is what's left."""
        router = FrontRouter(page_root="/site")
        pipeline = RoutePipeline(router)
        file = SourceFile(
            path="/site/home.html",
            contents=b"---\nname: home\nurl: /\n---\n<h1>Home</h1>\n",
        )

        result = pipeline.transform(file)

        assert result.contents == b"<h1>Home</h1>\n"
        assert result.path == file.path
        assert [r.to_dict() for r in router] == [
            {"name": "home", "url": "/", "path": "home.html"}
        ]

    def test_file_path_overrides_front_matter_path(self):
        """The file's own path wins over a 'path' attribute."""
        router = FrontRouter(page_root="/site")
        RoutePipeline(router).transform(
            SourceFile(path="/site/a.html", contents=b"---\nurl: /a\npath: elsewhere\n---\n")
        )
        assert router.routes[0].path == "a.html"

    def test_passes_through_without_front_matter(self):
        """Pages without front matter are untouched and unregistered."""
        router = FrontRouter(page_root="/site")
        file = SourceFile(path="/site/partial.html", contents=b"<div>partial</div>")

        assert RoutePipeline(router).transform(file) is file
        assert len(router) == 0

    def test_passes_through_empty_entries(self):
        """Entries without contents pass straight through."""
        router = FrontRouter()
        file = SourceFile(path="/site/dir")

        assert RoutePipeline(router).transform(file) is file
        assert len(router) == 0

    def test_invalid_yaml(self):
        """Bad front matter raises PipelineError naming the file."""
        pipeline = RoutePipeline(FrontRouter())
        with pytest.raises(PipelineError, match="broken.html"):
            pipeline.transform(
                SourceFile(path="/site/broken.html", contents=b"---\nurl: [\n---\n")
            )

    def test_front_matter_without_url(self):
        """Front matter without a url is stripped but not registered."""
        router = FrontRouter()
        result = RoutePipeline(router).transform(
            SourceFile(path="/site/layout.html", contents=b"---\ntitle: x\n---\n<main/>")
        )

        assert result.contents == b"<main/>"
        assert len(router) == 0

    def test_empty_front_matter(self):
        """An empty block is stripped and not registered."""
        router = FrontRouter()
        result = RoutePipeline(router).transform(
            SourceFile(path="/site/empty.html", contents=b"---\n---\n<p>x</p>")
        )

        assert result.contents == b"<p>x</p>"
        assert len(router) == 0

    def test_non_string_url(self):
        """A url that isn't a string or number is a pipeline error."""
        pipeline = RoutePipeline(FrontRouter())
        with pytest.raises(PipelineError, match="url"):
            pipeline.transform(
                SourceFile(path="/site/badurl.html", contents=b"---\nurl: [a, b]\n---\n")
            )

    def test_not_utf8(self):
        """Undecodable pages raise PipelineError."""
        pipeline = RoutePipeline(FrontRouter())
        with pytest.raises(PipelineError, match="UTF-8"):
            pipeline.transform(SourceFile(path="/site/bin.html", contents=b"\xff\xfe\x00"))

    def test_finish_writes_routes(self, tmp_path):
        """finish flushes the router."""
        router = FrontRouter(page_root="/site")
        pipeline = RoutePipeline(router)
        pipeline.transform(
            SourceFile(path="/site/home.html", contents=b"---\nname: home\nurl: /\n---\n")
        )

        output = tmp_path / "routes.js"
        asyncio.run(pipeline.finish(output))

        assert HOME_ROUTE in output.read_text()


class TestSourceFiles:
    """Tests for glob expansion."""

    def test_glob_base(self):
        """The base is the wildcard-free leading directory."""
        assert _glob_base("src/pages/**/*.html") == "src/pages"
        assert _glob_base("src/pages/home.html") == "src/pages"
        assert _glob_base("*.html") == "."
        assert _glob_base("home.html") == "."

    def test_sorted_and_deduplicated(self, pages_dir):
        """Matches come back sorted, each file once."""
        patterns = [str(pages_dir / "*.html"), str(pages_dir / "home.html")]
        files = list(iter_source_files(patterns))

        assert [f.relative for f in files] == ["home.html", "parent.html", "partial.html"]

    def test_recursive_glob(self, make_page, tmp_path):
        """** matches nested directories; relative keeps the nesting."""
        make_page("index.html", "url: /\n")
        make_page("docs/intro.html", "url: /docs/intro\n")

        files = list(iter_source_files([str(tmp_path / "site" / "**" / "*.html")]))

        assert sorted(f.relative for f in files) == ["docs/intro.html", "index.html"]


class TestBuild:
    """Tests for the standalone build."""

    def _options(self, pages_dir, tmp_path, src="home.html", **overrides):
        options = {
            "src": str(pages_dir / src),
            "dest": str(tmp_path / "_build"),
            "root": str(pages_dir),
            "path": str(tmp_path / "_build" / "routes.js"),
        }
        options.update(overrides)
        return options

    def test_standalone(self, pages_dir, tmp_path):
        """Pages are stripped into dest and the route is written."""
        result = asyncio.run(build(self._options(pages_dir, tmp_path)))

        assert result == BuildResult(
            files=1, routes=1, output=str(tmp_path / "_build" / "routes.js")
        )
        page = (tmp_path / "_build" / "home.html").read_text()
        assert "---" not in page
        assert "<h1>Home</h1>" in page
        assert HOME_ROUTE in (tmp_path / "_build" / "routes.js").read_text()

    def test_standalone_without_page_output(self, pages_dir, tmp_path):
        """Without dest only the routes file is written."""
        options = self._options(pages_dir, tmp_path, dest=None)
        asyncio.run(build(options))

        assert not (tmp_path / "_build" / "home.html").exists()
        assert HOME_ROUTE in (tmp_path / "_build" / "routes.js").read_text()

    def test_appending(self, pages_dir, tmp_path):
        """A second run appends to the routes file."""
        asyncio.run(build(self._options(pages_dir, tmp_path)))
        asyncio.run(build(self._options(pages_dir, tmp_path, src="parent.html")))

        routes = (tmp_path / "_build" / "routes.js").read_text()
        assert HOME_ROUTE in routes
        assert PARENT_ROUTE in routes
        assert routes.index(HOME_ROUTE) < routes.index(PARENT_ROUTE)

    def test_overwriting(self, pages_dir, tmp_path):
        """With overwrite the second run replaces the routes file."""
        asyncio.run(build(self._options(pages_dir, tmp_path)))
        asyncio.run(
            build(self._options(pages_dir, tmp_path, src="parent.html", overwrite=True))
        )

        routes = (tmp_path / "_build" / "routes.js").read_text()
        assert HOME_ROUTE not in routes
        assert PARENT_ROUTE in routes

    def test_page_without_front_matter(self, pages_dir, tmp_path):
        """Partials are copied unchanged and produce no route."""
        result = asyncio.run(build(self._options(pages_dir, tmp_path, src="partial.html")))

        assert result.routes == 0
        assert (tmp_path / "_build" / "partial.html").read_text() == (
            pages_dir / "partial.html"
        ).read_text()
        assert (tmp_path / "_build" / "routes.js").read_text() == "var routes = [];"

    def test_layout_page_alongside_routes(self, pages_dir, tmp_path):
        """A url-less page doesn't stop the other pages' routes."""
        (pages_dir / "layout.html").write_text("---\ntitle: Layout only\n---\n<main></main>\n")

        result = asyncio.run(
            build(self._options(pages_dir, tmp_path, src="*.html"))
        )

        assert result.files == 4
        assert result.routes == 2
        assert (tmp_path / "_build" / "layout.html").read_text() == "<main></main>\n"
        routes = (tmp_path / "_build" / "routes.js").read_text()
        assert routes == f"var routes = [{HOME_ROUTE},{PARENT_ROUTE}];"

    def test_glob_sorts_routes(self, pages_dir, tmp_path):
        """All pages through one build come out sorted by url."""
        result = asyncio.run(
            build(self._options(pages_dir, tmp_path, src="*.html", library="node"))
        )

        assert result.files == 3
        assert result.routes == 2
        routes = (tmp_path / "_build" / "routes.js").read_text()
        assert routes == f"module.exports = [{HOME_ROUTE},{PARENT_ROUTE}];"

    def test_dry_run_writes_nothing(self, pages_dir, tmp_path):
        """Dry runs render the routes without touching disk."""
        result = asyncio.run(
            build(self._options(pages_dir, tmp_path, src="*.html"), dry_run=True)
        )

        assert result.rendered == f"var routes = [{HOME_ROUTE},{PARENT_ROUTE}];"
        assert not (tmp_path / "_build").exists()

    def test_requires_src(self, tmp_path):
        """Missing src is a configuration error."""
        with pytest.raises(ConfigurationError, match="src"):
            asyncio.run(build({"path": str(tmp_path / "routes.js")}))

    def test_requires_output(self, pages_dir, tmp_path):
        """Missing routes path is a configuration error."""
        with pytest.raises(ConfigurationError, match="path"):
            asyncio.run(build({"src": str(pages_dir / "*.html")}))

    def test_unknown_library(self, pages_dir, tmp_path):
        """Unknown adapters fail before any file is written."""
        with pytest.raises(ConfigurationError):
            asyncio.run(build(self._options(pages_dir, tmp_path, library="vue")))
        assert not (tmp_path / "_build").exists()
