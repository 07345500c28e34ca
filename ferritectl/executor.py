import logging
from typing import AsyncIterator

from ferritectl.exception import FerriteError
from ferritectl.formatter import OutputFormat, format_result
from ferritectl.parser import command_lines, split_command
from ferritectl.session import Session


class CommandExecutor:
    def __init__(self, session: Session, output_format: OutputFormat = OutputFormat.JSON) -> None:
        self._session = session
        self.output_format = output_format
        self._logger = logging.getLogger("ferritectl.executor")

    async def execute(self, line: str) -> str | None:
        """
        Run one command line against the server and render the reply.

        Returns ``None`` for a blank line. Server-side errors surface as
        ``CommandError`` with the server's message untouched; the command is
        never re-sent.
        """
        parsed = split_command(line)
        if parsed is None:
            return None

        command, args = parsed
        self._logger.info(f"> {line}")
        reply = await self._session.transport.execute(command, *args)
        return format_result(reply, self.output_format)

    async def execute_many(self, text: str) -> AsyncIterator[tuple[str, str | None, FerriteError | None]]:
        # one failing line does not stop the following ones
        for line in command_lines(text):
            try:
                output = await self.execute(line)
            except FerriteError as ex:
                yield line, None, ex
            else:
                yield line, output, None
