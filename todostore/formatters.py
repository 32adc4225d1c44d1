from rich.table import Table
from rich.panel import Panel
from rich.markup import escape
from rich.text import Text
from typing import List

from .models import Task


class RichFormatter:
    """Rich formatting utilities for CLI output"""
    
    STATUS_CONFIG = {
        'pending': {'color': 'yellow', 'symbol': '⏳'},
        'completed': {'color': 'green', 'symbol': '✅'},
    }
    
    @staticmethod
    def status_text(status: str) -> Text:
        """Status with symbol and color; unknown statuses render plain"""
        info = RichFormatter.STATUS_CONFIG.get(status.lower())
        if not info:
            return Text(status.upper())
        text = Text(f"{info['symbol']} {status.upper()}")
        text.stylize(info['color'])
        return text
    
    @staticmethod
    def create_task_table(owner: str, tasks: List[Task]) -> Panel:
        """Create a Rich table listing an owner's tasks"""
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Task ID", style="cyan", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Description", style="dim white")
        table.add_column("Status", style="white")
        table.add_column("Updated", style="white")
        
        for task in tasks:
            table.add_row(
                Text(task.taskId),
                Text(task.title),
                Text(task.description),
                RichFormatter.status_text(task.status),
                Text(task.updatedAt)
            )
        
        return Panel(
            table,
            title=f"[bold cyan]TASKS · {escape(owner)}[/bold cyan]",
            border_style="blue",
            padding=(0, 1)
        )
    
    @staticmethod
    def create_task_panel(task: Task, title: str = "TASK") -> Panel:
        """Key/value panel for a single task"""
        table = Table(show_header=False, box=None)
        table.add_column("Field", style="bold cyan")
        table.add_column("Value", style="white")
        
        table.add_row("Owner", Text(task.owner))
        table.add_row("Task ID", Text(task.taskId))
        table.add_row("Title", Text(task.title))
        table.add_row("Description", Text(task.description or "-"))
        table.add_row("Status", RichFormatter.status_text(task.status))
        table.add_row("Created", Text(task.createdAt))
        table.add_row("Updated", Text(task.updatedAt))
        
        return Panel(table, title=f"[bold cyan]{escape(title)}[/bold cyan]", border_style="blue")
