from mafia.cli import app

app(prog_name="mafia")
