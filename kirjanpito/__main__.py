from kirjanpito.cli import app

app()
