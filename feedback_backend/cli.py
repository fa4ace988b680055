"""Feedback API CLI tool (feedbackctl)."""

from typing import Optional

import httpx
import typer

from feedback_backend.core.config import settings
from feedback_backend.models.feedback import PLATFORM_OPTIONS, MODULE_OPTIONS

app = typer.Typer(name="feedbackctl", help="Feedback Management CLI")
db_app = typer.Typer(help="Database management commands")
logs_app = typer.Typer(help="Activity and API request logs")
app.add_typer(db_app, name="db")
app.add_typer(logs_app, name="logs")

PLATFORM_HELP = f"Platform, usually one of: {', '.join(PLATFORM_OPTIONS)}"
MODULE_HELP = f"Module, usually one of: {', '.join(MODULE_OPTIONS)}"


def get_client() -> httpx.Client:
    """HTTP client bound to the configured API base URL."""
    return httpx.Client(base_url=settings.API_BASE_URL, timeout=30)


def _call(method: str, path: str, **kwargs) -> dict:
    """Send a request and return the JSON envelope; exit 1 on an error envelope."""
    with get_client() as client:
        try:
            resp = client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            typer.echo(f"❌ Request failed: {e}", err=True)
            raise typer.Exit(code=1)

    try:
        data = resp.json()
    except ValueError:
        typer.echo(f"❌ Unexpected response ({resp.status_code})", err=True)
        raise typer.Exit(code=1)
    if not data.get("success"):
        typer.echo(f"❌ {data.get('message', 'Request failed')} ({resp.status_code})", err=True)
        for error in data.get("errors", []):
            typer.echo(f"   - {error}", err=True)
        raise typer.Exit(code=1)
    return data


def _print_feedback(fb: dict) -> None:
    typer.echo(f"  [{fb['id']}] {fb['title']} ({fb['platform']} / {fb['module']})")


def _payload(title, platform, module, description, attachments, tags) -> dict:
    """Check a payload locally before sending it."""
    from feedback_backend.core.exceptions import ValidationError
    from feedback_backend.services.validation import validate_feedback

    payload = {
        "title": title,
        "platform": platform,
        "module": module,
        "description": description,
        "attachments": attachments,
        "tags": tags,
    }
    try:
        validate_feedback(payload)
    except ValidationError as e:
        typer.echo(f"❌ {e.message}", err=True)
        for error in e.errors:
            typer.echo(f"   - {error}", err=True)
        raise typer.Exit(code=1)
    return payload


# ---- Database ----
@db_app.command("create")
def db_create():
    """Create the MySQL database if it doesn't exist."""
    import pymysql
    from sqlalchemy.engine import make_url

    url = make_url(settings.DATABASE_URL)
    conn = pymysql.connect(
        host=url.host or "localhost",
        port=url.port or 3306,
        user=url.username,
        password=url.password or "",
    )
    try:
        cursor = conn.cursor()
        cursor.execute(
            f"CREATE DATABASE IF NOT EXISTS `{url.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
        typer.echo(f"✅ Database '{url.database}' created (or already exists)")
    finally:
        conn.close()


@db_app.command("init")
def db_init():
    """Create the feedbacks, activity_logs and api_requests tables."""
    from feedback_backend.db.session import build_engine, init_schema

    init_schema(build_engine())
    typer.echo("✅ Tables created")


@db_app.command("seed")
def db_seed():
    """Insert sample feedbacks."""
    from feedback_backend.db.session import build_engine, build_session_factory
    from feedback_backend.db.seeds.seed_feedbacks import seed_feedbacks

    db = build_session_factory(build_engine())()
    try:
        inserted = seed_feedbacks(db)
    finally:
        db.close()
    typer.echo(f"✅ Seeded {inserted} feedbacks")


@db_app.command("reset")
def db_reset():
    """Drop and recreate all tables (DANGER)."""
    confirm = typer.confirm("⚠️  This will DROP all feedbacks and logs. Continue?")
    if not confirm:
        raise typer.Abort()
    import feedback_backend.models  # noqa: F401
    from feedback_backend.db.base import Base
    from feedback_backend.db.session import build_engine

    engine = build_engine()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    typer.echo("✅ Tables reset")


# ---- Feedbacks ----
@app.command("list")
def list_feedbacks(
    search: Optional[str] = typer.Option(None, help="Match title, description or tags"),
    platform: Optional[str] = typer.Option(None, help="Platform filter"),
    module: Optional[str] = typer.Option(None, help="Module filter"),
):
    """List feedbacks, newest first."""
    params = {k: v for k, v in {"search": search, "platform": platform, "module": module}.items() if v}
    data = _call("GET", "/feedbacks", params=params)
    for fb in data["data"]:
        _print_feedback(fb)
    typer.echo(f"{data['count']} feedback(s)")


@app.command("show")
def show_feedback(feedback_id: int = typer.Argument(..., help="Feedback ID")):
    """Show one feedback."""
    fb = _call("GET", f"/feedbacks/{feedback_id}")["data"]
    _print_feedback(fb)
    typer.echo(f"  {fb['description']}")
    if fb.get("attachments"):
        typer.echo(f"  attachments: {fb['attachments']}")
    if fb.get("tags"):
        typer.echo(f"  tags: {fb['tags']}")


@app.command("add")
def add_feedback(
    title: str = typer.Option(..., help="Title"),
    platform: str = typer.Option(..., help=PLATFORM_HELP),
    module: str = typer.Option(..., help=MODULE_HELP),
    description: str = typer.Option(..., help="Description"),
    attachments: str = typer.Option("", help="Comma-separated filenames"),
    tags: str = typer.Option("", help="Comma-separated tags"),
):
    """Create a feedback."""
    payload = _payload(title, platform, module, description, attachments, tags)
    data = _call("POST", "/feedbacks", json=payload)
    typer.echo(f"✅ {data['message']}")
    _print_feedback(data["data"])


@app.command("edit")
def edit_feedback(
    feedback_id: int = typer.Argument(..., help="Feedback ID"),
    title: str = typer.Option(..., help="Title"),
    platform: str = typer.Option(..., help=PLATFORM_HELP),
    module: str = typer.Option(..., help=MODULE_HELP),
    description: str = typer.Option(..., help="Description"),
    attachments: str = typer.Option("", help="Comma-separated filenames"),
    tags: str = typer.Option("", help="Comma-separated tags"),
):
    """Replace a feedback's fields."""
    payload = _payload(title, platform, module, description, attachments, tags)
    data = _call("PUT", f"/feedbacks/{feedback_id}", json=payload)
    typer.echo(f"✅ {data['message']}")
    _print_feedback(data["data"])


@app.command("delete")
def delete_feedback(feedback_id: int = typer.Argument(..., help="Feedback ID")):
    """Delete a feedback."""
    data = _call("DELETE", f"/feedbacks/{feedback_id}")
    typer.echo(f"✅ {data['message']}")


# ---- Logs ----
@logs_app.command("activities")
def activity_logs():
    """Show the latest activity entries."""
    for log in _call("GET", "/logs/activities")["data"]:
        typer.echo(
            f"  [{log['id']}] {log['created_at']} {log['action']} "
            f"{log['table_name']}#{log['record_id']} {log['details'] or ''}"
        )


@logs_app.command("requests")
def request_logs():
    """Show the latest API request traces."""
    for log in _call("GET", "/logs/api-requests")["data"]:
        typer.echo(
            f"  [{log['id']}] {log['method']} {log['endpoint']} "
            f"{log['status_code']} {log['response_time']}ms"
        )


@app.command("serve")
def serve(
    host: str = typer.Option(settings.HOST, help="Host"),
    port: int = typer.Option(settings.PORT, help="Port"),
    reload: bool = typer.Option(False, help="Auto-reload"),
):
    """Start the API server."""
    import uvicorn
    uvicorn.run("feedback_backend.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
