import asyncio
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, Any

import typer

from caddy_admin.cli._logging import configure_logging
from caddy_admin.cli._output import print_error, print_value
from caddy_admin.client import CaddyAdminClient
from caddy_admin.codec import CADDYFILE, is_raw_text
from caddy_admin.config import ClientSettings, create_config, load_client_settings
from caddy_admin.exceptions import SettingsError
from caddy_admin.result import Err, Ok, Result

app = typer.Typer(name="caddy-admin", help="Caddy admin API client")
config_app = typer.Typer(help="Read and modify the running configuration.")
pki_app = typer.Typer(help="Inspect certificate authorities managed by the PKI app.")
app.add_typer(config_app, name="config")
app.add_typer(pki_app, name="pki")

type _Call = Callable[[CaddyAdminClient], Awaitable[Result[Any]]]

# Module-level DI factory for testing
_client_factory: Callable[[ClientSettings], CaddyAdminClient] | None = None


def set_client_factory(factory: Callable[[ClientSettings], CaddyAdminClient] | None) -> None:
    global _client_factory
    _client_factory = factory


def _build_client(settings: ClientSettings) -> CaddyAdminClient:
    if _client_factory is not None:
        return _client_factory(settings)
    return CaddyAdminClient.from_settings(settings)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    url: Annotated[str | None, typer.Option("--url", help="Admin API address, e.g. http://localhost:2019")] = None,
    username: Annotated[str | None, typer.Option("--username", "-u", help="Basic auth username")] = None,
    password: Annotated[str | None, typer.Option("--password", "-p", help="Basic auth password")] = None,
    timeout: Annotated[float | None, typer.Option("--timeout", help="Request timeout in seconds")] = None,
    config_file: Annotated[str, typer.Option("--config", help="YAML config file")] = "caddy-admin.yaml",
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
) -> None:
    """Caddy admin API client."""
    configure_logging(verbose=verbose)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()
    cfg = create_config(config_file, url=url, username=username, password=password, timeout=timeout)
    try:
        ctx.obj = load_client_settings(cfg)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _run(ctx: typer.Context, call: _Call) -> None:
    settings: ClientSettings = ctx.obj

    async def _invoke() -> Result[Any]:
        async with _build_client(settings) as caddy:
            return await call(caddy)

    match asyncio.run(_invoke()):
        case Ok(value):
            print_value(value)
        case Err(message):
            print_error(message)
            raise typer.Exit(code=1)


def _parse_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        print_error(f"Invalid JSON: {e}")
        raise typer.Exit(code=1) from e


def _read_payload(path: Path, content_type: str) -> Any:
    text = path.read_text(encoding="utf-8")
    if is_raw_text(content_type):
        return text
    return _parse_json(text)


_FileArg = Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Config file to send")]
_ContentTypeOpt = Annotated[str, typer.Option("--content-type", "-t", help="Content-Type of the config file")]
_PathArg = Annotated[str, typer.Argument(help="Config path, e.g. apps/http/servers")]
_ValueArg = Annotated[str, typer.Argument(help="JSON value")]
_CaIdArg = Annotated[str, typer.Argument(help="CA identifier")]


@app.command()
def load(ctx: typer.Context, file: _FileArg, content_type: _ContentTypeOpt = CADDYFILE) -> None:
    """Load a new configuration, replacing the running one."""
    payload = _read_payload(file, content_type)
    _run(ctx, lambda caddy: caddy.load_config(payload, content_type))


@app.command()
def adapt(ctx: typer.Context, file: _FileArg, content_type: _ContentTypeOpt = CADDYFILE) -> None:
    """Adapt a configuration to JSON without loading it."""
    payload = _read_payload(file, content_type)
    _run(ctx, lambda caddy: caddy.adapt_config(payload, content_type))


@app.command()
def stop(ctx: typer.Context) -> None:
    """Gracefully shut down the server."""
    _run(ctx, lambda caddy: caddy.stop())


@app.command()
def upstreams(ctx: typer.Context) -> None:
    """Show reverse proxy upstream status."""
    _run(ctx, lambda caddy: caddy.get_reverse_proxy_upstreams())


@config_app.command("get")
def config_get(ctx: typer.Context, path: Annotated[str, typer.Argument(help="Config path")] = "") -> None:
    """Export the configuration at PATH (the whole config when omitted)."""
    _run(ctx, lambda caddy: caddy.get_config(path))


@config_app.command("set")
def config_set(ctx: typer.Context, path: _PathArg, value: _ValueArg) -> None:
    """Set or replace the value at PATH (POST)."""
    payload = _parse_json(value)
    _run(ctx, lambda caddy: caddy.set_config(path, payload))


@config_app.command("create")
def config_create(ctx: typer.Context, path: _PathArg, value: _ValueArg) -> None:
    """Create a new value at PATH (PUT)."""
    payload = _parse_json(value)
    _run(ctx, lambda caddy: caddy.create_config(path, payload))


@config_app.command("update")
def config_update(ctx: typer.Context, path: _PathArg, value: _ValueArg) -> None:
    """Replace the existing value at PATH (PATCH)."""
    payload = _parse_json(value)
    _run(ctx, lambda caddy: caddy.update_config(path, payload))


@config_app.command("delete")
def config_delete(ctx: typer.Context, path: _PathArg) -> None:
    """Delete the value at PATH."""
    _run(ctx, lambda caddy: caddy.delete_config(path))


@pki_app.command("ca")
def pki_ca(ctx: typer.Context, ca_id: _CaIdArg = "local") -> None:
    """Show information about a CA."""
    _run(ctx, lambda caddy: caddy.get_ca_info(ca_id))


@pki_app.command("certificates")
def pki_certificates(ctx: typer.Context, ca_id: _CaIdArg = "local") -> None:
    """Print a CA's certificate chain as PEM."""
    _run(ctx, lambda caddy: caddy.get_ca_certificates(ca_id, response_type=str))
