"""Running word completion off the interactive path with asyncio."""

from __future__ import annotations

import asyncio
from concurrent.futures import Executor
from typing import Optional

from completion_engine.host import Editor, TaskController
from completion_engine.runtime import telemetry

from .item import CompletionResponse
from .trigger import Trigger
from .word import LOGGER_NAME, completion


async def request_word_completion(
    editor: Editor,
    trigger: Trigger,
    controller: TaskController,
    *,
    savepoint: object = None,
    executor: Optional[Executor] = None,
) -> Optional[CompletionResponse]:
    """Supersede any outstanding request and run a fresh word completion.

    The cheap phase runs on the caller's loop; the scan is handed to
    ``executor`` (the loop's default when ``None``). A response whose request
    was superseded or canceled while scanning is dropped.
    """

    handle = controller.restart()
    task = completion(editor, trigger, handle, savepoint)
    if task is None:
        return None

    loop = asyncio.get_running_loop()
    response = await loop.run_in_executor(executor, task)
    if handle.is_canceled():
        telemetry.record_event(
            "completion.word.superseded",
            data={"generation": handle.generation},
            logger_name=LOGGER_NAME,
        )
        return None
    return response


__all__ = ["request_word_completion"]
