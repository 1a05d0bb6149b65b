from dotstrap.cli import app

app(prog_name="dotstrap")
