from vindicate.interface.cli import app

app()
