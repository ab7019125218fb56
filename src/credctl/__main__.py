from credctl.apps.cli.main import app

app(prog_name="credctl")
