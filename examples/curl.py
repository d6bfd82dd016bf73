"""curl.py

A curl-like client showing subcommands, cumulative flags and validators.
It prints the request it would send instead of sending it.
"""

from datetime import timedelta
from pathlib import Path

from rich.console import Console
from rich.table import Table

from pinion import Application
from pinion.parser import ExistingFileValue, ParseContext

console = Console()

app = Application("curl", "An example implementation of curl.").version("curl 0.1.0")
timeout = app.add_flag("timeout", "Set connection timeout.", short="t", type=timedelta)
headers = app.add_flag(
    "headers",
    "Add HTTP headers to the request.",
    short="H",
    type=list[str],
    placeholder="HEADER:VALUE",
)

get = app.add_command("get", "GET a resource.")
get_url = get.add_argument("url", "URL to GET.", required=True)

post = app.add_command("post", "POST a resource.")
post_data = post.add_flag(
    "data", "Key-value data to POST.", short="d", type=dict, placeholder="KEY=VALUE"
)
post_binary = post.add_flag(
    "data-binary", "File with binary data to POST.", value=ExistingFileValue()
)
post_url = post.add_argument("url", "URL to POST to.", required=True)


def check_headers(context: ParseContext) -> None:
    for header in headers.get():
        if ":" not in header:
            raise ValueError(f"expected HEADER:VALUE got '{header}'")


def check_post_body(context: ParseContext) -> None:
    if not post_data.get() and post_binary.get() is None:
        raise ValueError("--data or --data-binary must be provided to POST")


app.add_validator(check_headers)
post.add_validator(check_post_body)


def show_request(method: str, url: str, body: str | Path | None = None) -> None:
    table = Table(title=f"{method} {url}", show_header=False)
    for header in headers.get():
        name, _, value = header.partition(":")
        table.add_row(name.strip(), value.strip())
    if timeout.get() is not None:
        table.add_row("timeout", str(timeout.get()))
    if body is not None:
        table.add_row("body", str(body))
    console.print(table)


if __name__ == "__main__":
    result = app.run()
    if result is not None and result.command == "get":
        show_request("GET", get_url.get())
    elif result is not None and result.command == "post":
        data = post_data.get()
        body = "&".join(f"{key}={value}" for key, value in data.items()) or post_binary.get()
        show_request("POST", post_url.get(), body)
