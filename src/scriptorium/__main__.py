from scriptorium.cli.app import app

app()
