from smartflow.cli import app

app()
