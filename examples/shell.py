"""shell.py

Interactive prompt completing a Pinion command line with prompt_toolkit.
Settings are read from `--config` files and `DEPLOY_*` environment variables.
"""

import shlex

from prompt_toolkit import PromptSession

from pinion import Application, ParseError
from pinion.completer import PinionCompleter
from pinion.parser import config_file_flag
from pinion.utils import setup_logging

setup_logging(mode="cli")

app = Application("deploy", "Deploy services.", terminate=lambda status: None)
app.default_envars()
config_file_flag(app)
app.add_flag("region", "Target region.", choices=["eu-west", "eu-central", "us-east"])

up = app.add_command("up", "Start a service.")
up.add_flag("replicas", "Number of replicas.", short="r", type=int, default=1)
up.add_argument("service", "Service to start.", required=True).hint_options(
    "api", "web", "worker"
)
down = app.add_command("down", "Stop a service.")
down.add_argument("service", "Service to stop.", required=True).hint_options(
    "api", "web", "worker"
)

if __name__ == "__main__":
    session = PromptSession("deploy> ", completer=PinionCompleter(app))
    while True:
        try:
            line = session.prompt()
        except (EOFError, KeyboardInterrupt):
            break
        try:
            result = app.parse(shlex.split(line))
        except (ParseError, ValueError) as error:
            app.console.print(f"[pinion.error]error:[/pinion.error] {error}")
            continue
        if result.command:
            app.console.print(result.command, result.values)
