"""
Application Launcher

Opens a URL in a specific desktop application.
The application is resolved on PATH (or used as an absolute path)
and started detached from the router process.
"""

import os
import shlex
import shutil
import subprocess
from typing import List

from core.errors import AppNotFound
from infra.logger import logger_launcher
from tools.schemas import AppTarget


class Launcher:
    """
    Launch collaborator used by the Router.

    launch() returns None on success and raises AppNotFound when the
    target cannot be resolved or started.
    """

    def resolve(self, target: AppTarget) -> List[str]:
        """
        Build the argv prefix for a target.

        The command may carry extra arguments ("firefox -P work").

        Raises:
            AppNotFound: executable missing from PATH / filesystem
        """
        try:
            parts = shlex.split(target.command)
        except ValueError as e:
            raise AppNotFound(target, f"bad command: {e}") from e

        if not parts:
            raise AppNotFound(target, "empty command")

        executable = parts[0]
        if os.path.isabs(executable):
            resolved = executable if os.access(executable, os.X_OK) else None
        else:
            resolved = shutil.which(executable)

        if not resolved:
            logger_launcher.error(f"APP_NOT_FOUND | app={target.name} | command={executable}")
            raise AppNotFound(target, f"'{executable}' not found")

        return [resolved] + parts[1:]

    def launch(self, url: str, target: AppTarget):
        """
        Open url in the target application.

        Raises:
            AppNotFound: target missing or failed to start
        """
        cmd = self.resolve(target) + [url]

        try:
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            logger_launcher.error(f"LAUNCH_FAILED | app={target.name} | error={e}")
            raise AppNotFound(target, str(e)) from e

        logger_launcher.info(f"LAUNCHED | app={target.name} | url={url[:100]}")
