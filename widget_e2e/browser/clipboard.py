"""
Clipboard copy with a fallback chain.

Browsers differ in what they allow: the async Clipboard API needs permissions
that only Chromium grants to automation, so ``document.execCommand('copy')``
on an off-screen textarea is tried next. Strategies are tried in order and
the first one that succeeds wins.
"""

from typing import Awaitable, Callable, NamedTuple, Optional, Sequence

from playwright.async_api import BrowserContext, Page

from ..core.logging_config import LoggerLike, child_logger

CLIPBOARD_PERMISSIONS = ["clipboard-read", "clipboard-write"]

WRITE_TEXT_SCRIPT = "async (text) => { await navigator.clipboard.writeText(text); }"

EXEC_COMMAND_SCRIPT = """
(text) => {
  const textarea = document.createElement('textarea');
  textarea.value = text;
  textarea.style.position = 'fixed';
  textarea.style.left = '-9999px';
  document.body.appendChild(textarea);
  try {
    textarea.select();
    return document.execCommand('copy');
  } finally {
    document.body.removeChild(textarea);
  }
}
"""

READ_TEXT_SCRIPT = "async () => navigator.clipboard.readText()"


class ClipboardCopyError(RuntimeError):
    """Raised by a copy strategy when the browser reports the copy failed."""


class CopyStrategy(NamedTuple):
    """A named way of putting text on the clipboard."""

    name: str
    run: Callable[[Page, BrowserContext, str], Awaitable[None]]


async def _native_clipboard(page: Page, context: BrowserContext, text: str) -> None:
    await context.grant_permissions(CLIPBOARD_PERMISSIONS)
    await page.evaluate(WRITE_TEXT_SCRIPT, text)


async def _exec_command(page: Page, context: BrowserContext, text: str) -> None:
    copied = await page.evaluate(EXEC_COMMAND_SCRIPT, text)
    if copied is False:
        raise ClipboardCopyError("clipboard execCommand('copy') returned false")


DEFAULT_STRATEGIES = (
    CopyStrategy("native_clipboard", _native_clipboard),
    CopyStrategy("exec_command", _exec_command),
)


async def copy_to_clipboard(
    page: Page,
    context: BrowserContext,
    text: str,
    strategies: Sequence[CopyStrategy] = DEFAULT_STRATEGIES,
    logger: Optional[LoggerLike] = None,
) -> bool:
    """
    Copy ``text`` to the clipboard using the first strategy that works.

    Never raises: failures are logged and reported through the return value.

    Args:
        page: Page to run the copy in
        context: Browser context owning the page, used for permissions
        text: Text to copy
        strategies: Strategies in the order they are tried
        logger: Run logger

    Returns:
        True if some strategy succeeded, False if all failed
    """
    log = child_logger(logger, "clipboard")

    for strategy in strategies:
        try:
            await strategy.run(page, context, text)
        except Exception as e:
            log.warning(f"Clipboard strategy {strategy.name} failed: {e}")
            continue
        log.debug(f"Copied via {strategy.name}")
        return True

    log.error("All clipboard strategies failed")
    return False


async def read_from_clipboard(
    page: Page,
    context: BrowserContext,
    logger: Optional[LoggerLike] = None,
) -> Optional[str]:
    """Read the clipboard text, or None when the browser refuses."""
    log = child_logger(logger, "clipboard")

    try:
        await context.grant_permissions(["clipboard-read"])
        text = await page.evaluate(READ_TEXT_SCRIPT)
    except Exception as e:
        log.warning(f"Could not read clipboard: {e}")
        return None

    log.debug("Read clipboard")
    return text
