from .cli import main

main(prog_name="observability-e2e")
