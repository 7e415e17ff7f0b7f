from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

console = Console(stderr=True)


class BencodeUI:
    def __init__(self, console=console):
        self.console = console

    def print_log(self, message, level="ERROR"):
        """Prints a styled one-line diagnostic."""
        color = "red" if level == "ERROR" else "green"
        if level == "WARNING": color = "yellow"

        line = Text.assemble((level, f"bold {color}"), ": ", str(message))
        self.console.print(line, highlight=False, soft_wrap=True)

    def show_torrent(self, torrent):
        """Displays the optional metainfo fields in a table."""
        table = Table(box=None, show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Name", torrent.name or "-")
        table.add_row("Piece Length", str(torrent.piece_length))
        table.add_row("Pieces", str(len(torrent.piece_hashes)))
        table.add_row("Total Length", str(torrent.total_length))
        table.add_row("Magnet", torrent.magnet_link())
        for url in torrent.announce_list:
            table.add_row("Tracker", url)

        self.console.print(Panel(table, title="Torrent Details", border_style="blue"))

        if len(torrent.files) > 1:
            files = Table(title="Files", box=None)
            files.add_column("Length", style="magenta", justify="right")
            files.add_column("Path", style="cyan")
            for f in torrent.files[:50]:  # Show first 50
                files.add_row(str(f['length']), f['path'])
            self.console.print(files)


ui = BencodeUI()
