"""
stitch-mcp: browse a catalog of design projects over MCP.

Each project has a prompt and a list of screens (code + screenshot). The
catalog comes either from a projects/ directory or from a built-in sample
table (--sample).

Tools:
  list_projects, search_projects, get_project, get_screen,
  get_screen_image, generate_screen
Resources:
  stitch:project/{projectId}
  stitch:project/{projectId}/screen/{screenId}

Usage:
  stitch-mcp                                  # serve MCP over stdio
  stitch-mcp list_projects
  stitch-mcp search_projects "checkout"
  stitch-mcp get_project parked
  stitch-mcp get_screen parked untitled_screen_1
  stitch-mcp read_resource "stitch:project/parked"
  stitch-mcp --projects-dir /path/to/projects get_project parked
  stitch-mcp --sample get_project p_travel
"""

from __future__ import annotations

import argparse
import base64
import hashlib
import json
import logging
import os
import re
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Mapping, Protocol

import anyio
from mcp.server.fastmcp import FastMCP, Image

logger = logging.getLogger("stitch_mcp")

SERVER_NAME = "stitch-mcp"
DEFAULT_PROJECTS_DIR = Path("projects")


# ── Errors ───────────────────────────────────────────────────

class StitchError(Exception):
    """Base error; carries a short code and the offending identifiers."""

    code = "error"

    def __init__(self, message: str, **data: object) -> None:
        super().__init__(message)
        self.message = message
        self.data = data

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": dict(self.data)}

    def __str__(self) -> str:
        return json.dumps(self.to_dict())


class NotFound(StitchError):
    code = "not_found"


class InvalidType(StitchError):
    code = "invalid_type"


class UnsupportedURI(StitchError):
    code = "unsupported_uri"


class UsageError(StitchError):
    code = "usage"


# ── Data model ───────────────────────────────────────────────

def _iso(dt: datetime) -> str:
    # Fixed width + "Z" so string order is chronological order.
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _mtime_iso(path: Path) -> str:
    return _iso(datetime.fromtimestamp(path.stat().st_mtime, timezone.utc))


@dataclass(frozen=True)
class CodeSnippet:
    language: str
    value: str

    def to_dict(self) -> dict:
        return {"language": self.language, "value": self.value}


@dataclass(frozen=True)
class ChatMessage:
    id: str
    role: str  # user | assistant | system
    content: str

    def to_dict(self) -> dict:
        return {"id": self.id, "role": self.role, "content": self.content}


@dataclass(frozen=True)
class Screen:
    id: str
    name: str
    image_url: str | None = None
    code: str | tuple[CodeSnippet, ...] | None = None
    tags: tuple[str, ...] | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict:
        d: dict = {"id": self.id, "name": self.name}
        if self.image_url is not None:
            d["imageUrl"] = self.image_url
        if self.code is not None:
            d["code"] = self.code if isinstance(self.code, str) else [c.to_dict() for c in self.code]
        if self.tags is not None:
            d["tags"] = list(self.tags)
        if self.updated_at is not None:
            d["updatedAt"] = self.updated_at
        return d


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    prompt: str
    screens: tuple[Screen, ...]
    updated_at: str | None = None
    chat: tuple[ChatMessage, ...] | None = None

    def to_dict(self) -> dict:
        d: dict = {
            "id": self.id,
            "name": self.name,
            "prompt": self.prompt,
            "screens": [s.to_dict() for s in self.screens],
        }
        if self.updated_at is not None:
            d["updatedAt"] = self.updated_at
        if self.chat is not None:
            d["chat"] = [m.to_dict() for m in self.chat]
        return d


@dataclass(frozen=True)
class ProjectSummary:
    id: str
    name: str
    prompt: str
    screen_count: int
    updated_at: str | None = None

    def to_dict(self) -> dict:
        d: dict = {"id": self.id, "name": self.name, "prompt": self.prompt, "screenCount": self.screen_count}
        if self.updated_at is not None:
            d["updatedAt"] = self.updated_at
        return d


@dataclass(frozen=True)
class ScreenImage:
    data: bytes
    mime_type: str

    def to_dict(self) -> dict:
        return {"image": base64.b64encode(self.data).decode("ascii"), "mimeType": self.mime_type}


def to_summary(project: Project) -> ProjectSummary:
    return ProjectSummary(
        id=project.id,
        name=project.name,
        prompt=project.prompt,
        screen_count=len(project.screens),
        updated_at=project.updated_at,
    )


# ── Stores ───────────────────────────────────────────────────

class ProjectStore(Protocol):
    def load_all(self) -> list[Project]: ...


# 1x1 transparent PNG
ONE_BY_ONE_PNG = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR4nGMAAQAABQABDQottAAAAABJRU5ErkJggg=="
)


def _code(language: str, value: str) -> CodeSnippet:
    return CodeSnippet(language=language, value=value)


def _msgs(*pairs: tuple[str, str]) -> tuple[ChatMessage, ...]:
    return tuple(ChatMessage(id=f"m{i}", role=role, content=content) for i, (role, content) in enumerate(pairs, 1))


def _shots(*rows: tuple) -> tuple[Screen, ...]:
    screens = []
    for row in rows:
        sid, name, tags, *code = row
        screens.append(
            Screen(
                id=sid,
                name=name,
                image_url=ONE_BY_ONE_PNG,
                tags=tuple(tags),
                code=tuple(code) if code else None,
            )
        )
    return tuple(screens)


def sample_projects(now: datetime) -> tuple[Project, ...]:
    """The demo catalog. Timestamps are relative to ``now``."""
    return (
        Project(
            id="p_travel",
            name="Travel App",
            prompt="Clean iOS travel UI with flight search",
            updated_at=_iso(now - timedelta(days=2)),
            chat=_msgs(
                ("user", "Design a flight search screen"),
                ("assistant", "Here are three variants."),
            ),
            screens=_shots(
                (
                    "s1",
                    "Flight Search",
                    ["search", "hero"],
                    _code(
                        "tsx",
                        "export const FlightSearch = () => (\n"
                        '  <div className="container">\n'
                        "    <h1>Find Flights</h1>\n"
                        "    <form>\n"
                        '      <input placeholder="From" />\n'
                        '      <input placeholder="To" />\n'
                        "      <button>Search</button>\n"
                        "    </form>\n"
                        "  </div>\n"
                        ");",
                    ),
                    _code("css", ".container{font-family:system-ui;max-width:480px;margin:0 auto;padding:16px}"),
                ),
                (
                    "s2",
                    "Results",
                    ["results", "list"],
                    _code("tsx", "export const Results = () => <ul><li>Flight A</li></ul>;"),
                ),
            ),
        ),
        Project(
            id="p_checkout",
            name="Shop Checkout",
            prompt="Checkout variants with address + card",
            updated_at=_iso(now - timedelta(days=1)),
            chat=_msgs(
                ("user", "We need a single-page checkout"),
                ("assistant", "Variant A uses a drawer for card details; Variant B uses inline sections."),
            ),
            screens=_shots(
                (
                    "s1",
                    "Checkout A",
                    ["checkout", "drawer"],
                    _code("html", "<main><h1>Checkout</h1><section>Address</section><section>Card</section></main>"),
                ),
                ("s2", "Checkout B", ["checkout", "inline"]),
                ("s3", "Confirmation", ["receipt"]),
            ),
        ),
        Project(
            id="p_onboarding",
            name="Onboarding Flow",
            prompt="3-step onboarding for mobile app",
            updated_at=_iso(now),
            chat=_msgs(
                ("system", "Use brand blue and rounded buttons"),
                ("user", "Make step 2 ask for notifications"),
            ),
            screens=_shots(
                ("s1", "Welcome", ["step1"]),
                ("s2", "Permissions", ["step2", "notifications"]),
                ("s3", "Done", ["step3"]),
            ),
        ),
        Project(
            id="p_parking",
            name="Parking App",
            prompt="Track where my car is parked with quick P-level presets and custom spots",
            updated_at=_iso(now - timedelta(hours=6)),
            chat=_msgs(
                ("user", "I park at work on P1-P3; need fast capture"),
                ("assistant", "Added large tap targets for P0-P3 and note field"),
            ),
            screens=_shots(
                (
                    "s1",
                    "Home",
                    ["home", "quick-actions"],
                    _code(
                        "tsx",
                        "export const Home = () => (\n"
                        "  <div>\n"
                        "    <h1>Where is my car?</h1>\n"
                        '    <div className="grid">\n'
                        '      {["P0","P1","P2","P3"].map(l => <button key={l}>{l}</button>)}\n'
                        "    </div>\n"
                        '    <input placeholder="Custom spot" />\n'
                        "    <button>Save</button>\n"
                        "  </div>\n"
                        ");",
                    ),
                ),
                ("s2", "Saved", ["list", "history"]),
            ),
        ),
        Project(
            id="p_dogfed",
            name="Dog Fed?",
            prompt="Track if the dog has been fed (AM/PM toggles, family contributions)",
            updated_at=_iso(now - timedelta(hours=3)),
            chat=_msgs(
                ("user", "We keep double-feeding by accident. Need AM/PM toggles."),
                ("assistant", "Added today card with AM/PM and contributors"),
            ),
            screens=_shots(
                (
                    "s1",
                    "Today",
                    ["today", "toggles"],
                    _code(
                        "tsx",
                        "export const Today = () => (\n"
                        "  <section>\n"
                        "    <h1>Dog Fed?</h1>\n"
                        '    <label><input type="checkbox"/> AM</label>\n'
                        '    <label><input type="checkbox"/> PM</label>\n'
                        "    <small>Contributors: Sam, Alex</small>\n"
                        "  </section>\n"
                        ");",
                    ),
                ),
                ("s2", "History", ["history"]),
            ),
        ),
    )


class MemoryStore:
    """Fixed sample catalog, built once and never mutated."""

    root: Path | None = None

    def __init__(self, now: datetime | None = None) -> None:
        self._projects = sample_projects(now or datetime.now(timezone.utc))

    def load_all(self) -> list[Project]:
        return list(self._projects)


UNTITLED_SCREEN_PREFIX = "untitled_screen_"


def _project_name(dirname: str) -> str:
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), dirname.replace("_", " "))


def _screen_name(dirname: str) -> str:
    return dirname.replace(UNTITLED_SCREEN_PREFIX, "Screen ", 1).replace("_", " ")


def _display_path(path: Path) -> str:
    try:
        return os.path.relpath(path)
    except ValueError:
        # e.g. a different drive on Windows
        return str(path.resolve())


class FilesystemStore:
    """
    Reads projects from a directory tree:

      <root>/<projectId>/prompt.txt
      <root>/<projectId>/<screenId>/code.html
      <root>/<projectId>/<screenId>/screen.png

    Every file is optional. Nothing is cached: each load_all() re-scans the
    tree, so edits on disk show up on the next call.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def load_all(self) -> list[Project]:
        if not self.root.is_dir():
            logger.debug("projects directory %s not found; catalog is empty", self.root)
            return []

        projects: list[Project] = []
        for entry in sorted(self.root.iterdir(), key=lambda p: p.name):
            if not entry.is_dir():
                continue
            try:
                projects.append(self._read_project(entry))
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Failed to read project %s: %s", entry.name, e)
        logger.debug("loaded %d project(s) from %s", len(projects), self.root)
        return projects

    def _read_project(self, path: Path) -> Project:
        prompt_path = path / "prompt.txt"
        prompt = prompt_path.read_text(encoding="utf-8").strip() if prompt_path.is_file() else ""

        screens = tuple(
            self._read_screen(entry)
            for entry in sorted(path.iterdir(), key=lambda p: p.name)
            if entry.is_dir()
        )
        return Project(
            id=path.name,
            name=_project_name(path.name),
            prompt=prompt,
            screens=screens,
            updated_at=_mtime_iso(path),
        )

    def _read_screen(self, path: Path) -> Screen:
        code_path = path / "code.html"
        image_path = path / "screen.png"
        has_code = code_path.is_file()
        return Screen(
            id=path.name,
            name=_screen_name(path.name),
            code=code_path.read_text(encoding="utf-8") if has_code else "",
            image_url=_display_path(image_path) if image_path.is_file() else None,
            updated_at=_mtime_iso(code_path) if has_code else None,
        )


# ── Queries ──────────────────────────────────────────────────

def _by_recency(projects: list[Project]) -> list[Project]:
    # sorted() is stable with reverse=True, so ties keep store order.
    return sorted(projects, key=lambda p: p.updated_at or "", reverse=True)


def list_projects(store: ProjectStore) -> list[ProjectSummary]:
    return [to_summary(p) for p in _by_recency(store.load_all())]


def search_projects(store: ProjectStore, query: str) -> list[ProjectSummary]:
    """
    Case-insensitive substring search.

    Name/prompt hits rank above chat-only hits; each group is ordered by
    recency. A blank query matches nothing.
    """
    q = query.strip().lower()
    if not q:
        return []

    direct: list[Project] = []
    chat_only: list[Project] = []
    for p in store.load_all():
        if q in p.name.lower() or q in p.prompt.lower():
            direct.append(p)
        elif any(q in m.content.lower() for m in p.chat or ()):
            chat_only.append(p)

    return [to_summary(p) for p in _by_recency(direct) + _by_recency(chat_only)]


def get_project(store: ProjectStore, project_id: str) -> Project:
    for p in store.load_all():
        if p.id == project_id:
            return p
    raise NotFound("Project not found", projectId=project_id)


def get_screen(store: ProjectStore, project_id: str, screen_id: str) -> Screen:
    project = get_project(store, project_id)
    for s in project.screens:
        if s.id == screen_id:
            return s
    raise NotFound("Screen not found", projectId=project_id, screenId=screen_id)


def _mime_type(path: Path | str) -> str:
    return "image/png" if str(path).lower().endswith(".png") else "image/jpeg"


def get_screen_image(store: ProjectStore, project_id: str, screen_id: str) -> ScreenImage:
    screen = get_screen(store, project_id, screen_id)
    if not screen.image_url or not Path(screen.image_url).is_file():
        raise NotFound(
            "Screen image not found", projectId=project_id, screenId=screen_id, imagePath=screen.image_url
        )
    return ScreenImage(data=Path(screen.image_url).read_bytes(), mime_type=_mime_type(screen.image_url))


# ── Screen generation ────────────────────────────────────────

GENERATE_TYPES: dict[str, str] = {
    "travel": "travel_app",
    "checkout": "shop_checkout",
    "onboarding": "onboarding_flow",
    "parking": "parked",
    "dog_fed": "dog_fed",
}
GENERATE_ASSETS: dict[str, str] = {"placeholder": "placeholder.png"}
INLINE_IMAGE_LIMIT = 100 * 1024


def _public_url(path: Path, data: bytes, public_base_url: str | None) -> str:
    if not public_base_url:
        return path.resolve().as_uri()
    digest = hashlib.sha256(data).hexdigest()
    return f"{public_base_url.rstrip('/')}/{digest}{path.suffix.lower()}"


def _image_payload(path: Path, public_base_url: str | None) -> dict:
    data = path.read_bytes()
    payload: dict = {"mimeType": _mime_type(path), "size": len(data)}
    if len(data) < INLINE_IMAGE_LIMIT:
        payload["image"] = base64.b64encode(data).decode("ascii")
    else:
        payload["url"] = _public_url(path, data, public_base_url)
    return payload


def generate_screen(store: ProjectStore, type_: str, *, public_base_url: str | None = None) -> dict:
    """
    Return a canned screen image for one of the known screen types.

    Small images (< 100KB) come back inline as base64; larger ones as a URL.
    """
    allowed = sorted([*GENERATE_TYPES, *GENERATE_ASSETS])

    if type_ in GENERATE_ASSETS:
        root = getattr(store, "root", None)
        asset = root / GENERATE_ASSETS[type_] if root is not None else None
        if asset is None or not asset.is_file():
            raise NotFound("Screen asset not found", type=type_, imagePath=str(asset) if asset else None)
        return {"type": type_, **_image_payload(asset, public_base_url)}

    if type_ not in GENERATE_TYPES:
        raise InvalidType("Unknown screen type", type=type_, allowed=allowed)

    project = get_project(store, GENERATE_TYPES[type_])
    for screen in project.screens:
        if screen.image_url and Path(screen.image_url).is_file():
            return {
                "type": type_,
                "projectId": project.id,
                "screenId": screen.id,
                **_image_payload(Path(screen.image_url), public_base_url),
            }
    raise NotFound("No screen image for type", type=type_, projectId=project.id)


# ── Resources ────────────────────────────────────────────────

PROJECT_URI = re.compile(r"^stitch:project/([^/]+)$")
SCREEN_URI = re.compile(r"^stitch:project/([^/]+)/screen/([^/]+)$")


def resolve_resource(store: ProjectStore, uri: str) -> Project | Screen:
    m = PROJECT_URI.match(uri)
    if m:
        return get_project(store, m.group(1))
    m = SCREEN_URI.match(uri)
    if m:
        return get_screen(store, m.group(1), m.group(2))
    raise UnsupportedURI("Unsupported URI pattern", uri=uri)


def read_resource(store: ProjectStore, uri: str) -> dict:
    return {"contents": [{"uri": uri, "mimeType": "application/json", "data": resolve_resource(store, uri).to_dict()}]}


# ── Configuration ────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    projects_dir: Path = DEFAULT_PROJECTS_DIR
    sample: bool = False
    public_base_url: str | None = None


def _env_bool(raw: str | None) -> bool:
    return raw is not None and raw.strip().lower() in ("1", "true", "yes", "on")


def resolve_settings(
    *,
    projects_dir: Path | str | None = None,
    sample: bool | None = None,
    public_base_url: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Explicit values win over the environment, which wins over defaults."""
    env = os.environ if environ is None else environ
    return Settings(
        projects_dir=Path(projects_dir or env.get("PROJECTS_DIR") or DEFAULT_PROJECTS_DIR),
        sample=sample if sample is not None else _env_bool(env.get("STITCH_SAMPLE")),
        public_base_url=public_base_url or env.get("STITCH_PUBLIC_BASE_URL") or None,
    )


def make_store(settings: Settings) -> ProjectStore:
    if settings.sample:
        return MemoryStore()
    return FilesystemStore(settings.projects_dir)


# ── MCP server ───────────────────────────────────────────────

def _dump(obj: object) -> str:
    return json.dumps(obj, indent=2)


def build_server(settings: Settings) -> FastMCP:
    store = make_store(settings)
    mcp = FastMCP(name=SERVER_NAME, instructions="Browse design projects: prompts, screens, code and screenshots.")

    @mcp.resource(
        "stitch:project/{projectId}",
        name="project",
        description="Project detail including prompt and screens",
        mime_type="application/json",
    )
    def project_resource(projectId: str) -> str:
        return _dump(get_project(store, projectId).to_dict())

    @mcp.resource(
        "stitch:project/{projectId}/screen/{screenId}",
        name="screen",
        description="Screen asset by projectId and screenId",
        mime_type="application/json",
    )
    def screen_resource(projectId: str, screenId: str) -> str:
        return _dump(get_screen(store, projectId, screenId).to_dict())

    @mcp.tool(name="list_projects", description="List design projects, most recently updated first.")
    def list_projects_tool() -> dict:
        return {"projects": [s.to_dict() for s in list_projects(store)]}

    @mcp.tool(name="search_projects", description="Search projects by query across name, prompt and chat.")
    def search_projects_tool(query: str) -> dict:
        return {"projects": [s.to_dict() for s in search_projects(store, query)]}

    @mcp.tool(name="get_project", description="Get project detail including prompt and screens.")
    def get_project_tool(projectId: str) -> dict:
        return {"project": get_project(store, projectId).to_dict()}

    @mcp.tool(name="get_screen", description="Get a single screen asset by projectId and screenId.")
    def get_screen_tool(projectId: str, screenId: str) -> dict:
        return {"screen": get_screen(store, projectId, screenId).to_dict()}

    @mcp.tool(name="get_screen_image", description="Get the screenshot image for a screen.")
    def get_screen_image_tool(projectId: str, screenId: str) -> Image:
        img = get_screen_image(store, projectId, screenId)
        return Image(data=img.data, format=img.mime_type.split("/", 1)[1])

    @mcp.tool(
        name="generate_screen",
        description=f"Get a ready-made screen image by type ({', '.join(sorted([*GENERATE_TYPES, *GENERATE_ASSETS]))}).",
    )
    def generate_screen_tool(type: str) -> dict:
        return generate_screen(store, type, public_base_url=settings.public_base_url)

    return mcp


# ── CLI ──────────────────────────────────────────────────────

COMMANDS = (
    "list_projects",
    "search_projects",
    "get_project",
    "get_screen",
    "get_screen_image",
    "generate_screen",
    "read_resource",
)

USAGE = (
    "Unknown command. Available commands: " + ", ".join(COMMANDS) + "\n"
    "Options: --projects-dir <path>, --sample, --public-base-url <url>\n"
)


def _require(args: list[str], count: int, usage: str) -> list[str]:
    if len(args) < count or not all(args[:count]):
        raise UsageError(f"Usage: {usage}")
    return args[:count]


def run_command(settings: Settings, command: str, args: list[str]) -> dict:
    """Run one CLI command and return its JSON-ready result."""
    store = make_store(settings)

    if command == "list_projects":
        return {"projects": [s.to_dict() for s in list_projects(store)]}
    if command == "search_projects":
        return {"projects": [s.to_dict() for s in search_projects(store, " ".join(args))]}
    if command == "get_project":
        (pid,) = _require(args, 1, "get_project [--projects-dir <path>] <projectId>")
        return {"project": get_project(store, pid).to_dict()}
    if command == "get_screen":
        pid, sid = _require(args, 2, "get_screen [--projects-dir <path>] <projectId> <screenId>")
        return {"screen": get_screen(store, pid, sid).to_dict()}
    if command == "get_screen_image":
        pid, sid = _require(args, 2, "get_screen_image [--projects-dir <path>] <projectId> <screenId>")
        return get_screen_image(store, pid, sid).to_dict()
    if command == "generate_screen":
        (type_,) = _require(args, 1, "generate_screen [--projects-dir <path>] <type>")
        return generate_screen(store, type_, public_base_url=settings.public_base_url)
    if command == "read_resource":
        (uri,) = _require(args, 1, "read_resource [--projects-dir <path>] <uri>")
        return read_resource(store, uri)
    raise UsageError(USAGE.strip())


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="stitch-mcp",
        add_help=True,
        description="Serve a catalog of design projects over MCP (stdio), or run one query and print JSON.",
        epilog="With no command, starts the MCP server on stdio.",
    )
    parser.add_argument("--projects-dir", type=Path, help="Projects directory (default: $PROJECTS_DIR or ./projects)")
    parser.add_argument(
        "--sample", action="store_true", default=None, help="Serve the built-in sample catalog instead of a directory"
    )
    parser.add_argument("--public-base-url", help="Base URL for images too large to inline (generate_screen)")
    vgroup = parser.add_mutually_exclusive_group()
    vgroup.add_argument("--quiet", action="store_true", help="Only log errors")
    vgroup.add_argument("--verbose", action="store_true", help="Log debug output to stderr")
    parser.add_argument("command", nargs="?", help="One of: " + ", ".join(COMMANDS))
    parser.add_argument("args", nargs="*", help="Command arguments")
    ns = parser.parse_intermixed_args(argv)

    level = logging.DEBUG if ns.verbose else logging.ERROR if ns.quiet else logging.WARNING
    # stdout carries MCP frames / JSON output; logs go to stderr.
    logging.basicConfig(stream=sys.stderr, level=level, format="%(levelname)s %(name)s: %(message)s")

    settings = resolve_settings(
        projects_dir=ns.projects_dir, sample=ns.sample, public_base_url=ns.public_base_url
    )

    if not ns.command:
        source = "sample catalog" if settings.sample else str(settings.projects_dir)
        logger.info("serving %s over stdio from %s", SERVER_NAME, source)
        anyio.run(build_server(settings).run_stdio_async)
        return

    if ns.command not in COMMANDS:
        sys.stderr.write(USAGE)
        raise SystemExit(1)

    try:
        result = run_command(settings, ns.command, ns.args)
    except Exception as e:
        logger.debug("command %s failed", ns.command, exc_info=True)
        sys.stderr.write(f"stitch-mcp: error: {e}\n")
        raise SystemExit(1)

    sys.stdout.write(json.dumps(result, indent=2) + "\n")


if __name__ == "__main__":
    main()
