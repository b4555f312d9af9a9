###########################################################################
###########################################################################
## Module defining CLI progress bars for long running graph algorithms.  ##
##                                                                       ##
## Copyright (C)  2022  Oliver Michael Kamperis                          ##
## Email: o.m.kamperis@gmail.com                                         ##
##                                                                       ##
## This program is free software: you can redistribute it and/or modify  ##
## it under the terms of the GNU General Public License as published by  ##
## the Free Software Foundation, either version 3 of the License, or     ##
## any later version.                                                    ##
##                                                                       ##
## This program is distributed in the hope that it will be useful,       ##
## but WITHOUT ANY WARRANTY; without even the implied warranty of        ##
## MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the          ##
## GNU General Public License for more details.                          ##
##                                                                       ##
## You should have received a copy of the GNU General Public License     ##
## along with this program. If not, see <https://www.gnu.org/licenses/>. ##
###########################################################################
###########################################################################

"""Module defining CLI progress bars for long running graph algorithms."""

import os
import threading
from time import sleep

import psutil
from tqdm import tqdm

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "ResourceProgressBar",
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


class ResourceProgressBar:
    """
    Class defining a tqdm based progress bar which also displays the current
    memory and CPU usage of the process.

    Usage statistics are sampled on a daemon thread, ten times per second by
    default, until the bar is closed.
    """

    __slots__ = {
        "__process": "Process used for getting resource usage statistics.",
        "__postfix": "Postfix dictionary used for updating the progress bar.",
        "__progress_bar": "The progress bar itself.",
        "__resource_update_interval": "Interval between resource updates.",
        "__running": "Event cleared to stop the update thread.",
        "__cpu_thread": "Thread used for updating resource statistics."
    }

    def __init__(
        self,
        total: int | None = None,
        desc: str | None = None,
        unit: str = "it",
        leave: bool = False,
        colour: str = "cyan",
        resource_update_interval: float = 0.1
    ) -> None:
        """
        Create a resource usage progress bar.

        See `tqdm.tqdm` for a description of parameters.
        """
        self.__process = psutil.Process(os.getpid())
        self.__postfix: dict[str, str] = {
            "Mem(Mb)": self.__get_mem(),
            "CPU(%)": self.__get_cpu()
        }
        self.__progress_bar = tqdm(
            total=total,
            desc=desc,
            unit=unit,
            leave=leave,
            miniters=1,
            colour=colour,
            postfix=self.__postfix
        )

        self.__resource_update_interval: float = resource_update_interval
        self.__running = threading.Event()
        self.__running.set()
        self.__cpu_thread = threading.Thread(target=self.__update, daemon=True)
        self.__cpu_thread.start()

    def __get_mem(self) -> str:
        """Get current memory usage in megabytes."""
        memory = self.__process.memory_info().rss / (1024 ** 2)
        return str(int(memory)).zfill(5)

    def __get_cpu(self) -> str:
        """Get cpu usage in percent."""
        return format(self.__process.cpu_percent(), "0.2f").zfill(6)

    def __update(self) -> None:
        """Target for the update thread."""
        while self.__running.is_set():
            self.__postfix["Mem(Mb)"] = self.__get_mem()
            self.__postfix["CPU(%)"] = self.__get_cpu()
            sleep(self.__resource_update_interval)

    @property
    def n(self) -> int:
        """Get the current progress bar value."""
        return self.__progress_bar.n

    def update(
        self,
        n: int = 1, /,
        data: dict[str, str] | None = None
    ) -> None:
        """
        Update the progress bar.

        Parameters
        ----------
        `n: int = 1` - The number of increments since the last update.

        `data: dict[str, str] | None = None` - Optional additional statistics
        to display in the bar's postfix, as a mapping of name to value.
        """
        if data is not None:
            self.__progress_bar.set_postfix(data | self.__postfix)
        else:
            self.__progress_bar.set_postfix(self.__postfix)
        self.__progress_bar.update(n)

    def close(self, wait: bool = False) -> None:
        """
        Close the progress bar and stop sampling resource usage.

        If `wait` is True, block until the update thread has finished.
        """
        self.__progress_bar.close()
        self.__running.clear()
        if wait:
            self.__cpu_thread.join()
