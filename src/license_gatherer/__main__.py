from license_gatherer.cli import app

app(prog_name="license-gatherer")
