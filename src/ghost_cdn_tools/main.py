from ghost_cdn_tools import bunny, origin, config
import typer

app = typer.Typer(no_args_is_help=True)
app.add_typer(bunny.app, name="bunny")
app.add_typer(origin.app, name="origin")
app.add_typer(config.app, name="config")
