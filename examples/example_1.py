#!/usr/bin/env python3
"""
sdpx - Parse and re-serialize a session description.

Parses the RFC 4566 sample session, prints its media blocks as a table,
collects parser warnings, and writes the canonical text back out.

Usage:
    python examples/example_1.py
"""

import sys
from pathlib import Path

# Add the parent directory to the path to import sdpx
sys.path.insert(0, str(Path(__file__).parent.parent))

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from sdpx import parse, stringify

console = Console()

OFFER = """v=0
o=jdoe 2890844526 2890842807 IN IP4 10.47.16.5
s=SDP Seminar
i=A Seminar on the session description protocol
u=http://www.example.com/seminars/sdp.pdf
e=j.doe@example.com (Jane Doe)
c=IN IP4 224.2.17.12/127
t=2873397496 2873404696
a=recvonly
x=vendor-extension
m=audio 49170 RTP/AVP 0
m=video 51372 RTP/AVP 99
a=rtpmap:99 h263-1998/90000
"""


def main() -> int:
    warnings = []
    sdp = parse(OFFER, on_warning=warnings.append)

    console.print(f"[bold]Session:[/bold] {sdp.session_name}")
    console.print(f"   Origin: {sdp.origin.username} ({sdp.origin.address})")
    console.print(f"   Starts: {sdp.times[0].start_datetime:%Y-%m-%d %H:%M} UTC")

    table = Table(title="Media Descriptions", box=box.ROUNDED)
    table.add_column("Type", style="cyan")
    table.add_column("Port", justify="right", style="green")
    table.add_column("Transport", style="yellow")
    table.add_column("Formats")
    table.add_column("Attributes")
    for media in sdp.media:
        table.add_row(
            media.media_type,
            str(media.port),
            media.transport,
            " ".join(media.formats),
            "\n".join(str(attr) for attr in media.attributes) or "-",
        )
    console.print(table)

    for warning in warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    console.print(Panel(stringify(sdp).rstrip(), title="Canonical SDP", border_style="green"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
