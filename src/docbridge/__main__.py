from docbridge.cli.app import app

app(prog_name="docbridge")
