import asyncio

import pytest

from ferritectl.exception import CommandError
from ferritectl.executor import CommandExecutor
from ferritectl.formatter import OutputFormat


@pytest.mark.ut
def test_blank_line_is_not_sent(session, profile, transport):
    executor = CommandExecutor(session)

    async def scenario():
        await session.connect(profile)
        return await executor.execute("   ")

    assert asyncio.run(scenario()) is None
    assert transport.commands == []


@pytest.mark.ut
def test_nil_reply(session, profile):
    executor = CommandExecutor(session, OutputFormat.RAW)

    async def scenario():
        await session.connect(profile)
        return await executor.execute("GET missing")

    assert asyncio.run(scenario()) == "(nil)"


@pytest.mark.ut
def test_command_error_is_not_retried(session, profile, transport):
    executor = CommandExecutor(session)

    async def scenario():
        await session.connect(profile)
        await executor.execute("FAIL")

    with pytest.raises(CommandError, match="unknown command"):
        asyncio.run(scenario())

    assert transport.commands == [("FAIL",)]


@pytest.mark.ut
def test_execute_many_keeps_going_after_errors(session, profile):
    executor = CommandExecutor(session, OutputFormat.RAW)

    async def scenario():
        await session.connect(profile)
        return [r async for r in executor.execute_many("SET a 1\n// skip\nFAIL\nGET a")]

    results = asyncio.run(scenario())

    assert [(line, out) for line, out, _ in results] == [("SET a 1", "OK"), ("FAIL", None), ("GET a", "1")]
    assert isinstance(results[1][2], CommandError)
