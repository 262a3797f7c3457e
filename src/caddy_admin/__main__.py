from caddy_admin.cli import app

app()
