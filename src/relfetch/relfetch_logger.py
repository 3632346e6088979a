"""
Multi-purpose logger for relfetch.
"""

import inspect
import logging
from typing import Optional

from pydantic import BaseModel


class LogLine(BaseModel):
    """
    Caller details attached to every log record.
    """

    caller_file: str
    caller_name: str
    caller_line: int


class RelfetchLogger:
    """
    Logger class
    """

    def __init__(self, name: str = "relfetch") -> None:
        self.logger = logging.getLogger(name)

    def log(self, message: str, level: int, exc_info: Optional[BaseException] = None) -> None:
        """
        Log the message at the given level, tagged with the location of the caller.
        """
        curframe = inspect.currentframe()
        calframe = inspect.getouterframes(curframe, 2)
        caller = LogLine(
            caller_file=calframe[1][1].replace("\\", "/").split("/")[-1],
            caller_line=calframe[1][2],
            caller_name=calframe[1][3],
        )
        self.logger.log(level=level, msg=message, exc_info=exc_info, extra=caller.model_dump())
