"""CLI command modules.

Commands are grouped by concern and registered as top-level commands of the
main application:

- deploy: config, deploy, update
- service: status, logs, restart, stop
- systemd: install-service, remove-service
- menu: interactive menu and help text
"""

from .deploy import config, deploy, update
from .menu import run_menu, show_help
from .service import logs, restart, status, stop
from .systemd import install_service, remove_service

__all__ = [
    "config",
    "deploy",
    "update",
    "status",
    "logs",
    "restart",
    "stop",
    "install_service",
    "remove_service",
    "run_menu",
    "show_help",
]
