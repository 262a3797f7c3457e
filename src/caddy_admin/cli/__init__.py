from caddy_admin.cli.app import app

__all__ = ["app"]
