"""Interactive prompts on the operator's terminal.

``ClickPrompter`` implements the prompter protocol the credentials
gatherer depends on. Any failure to read an answer (end of input,
Ctrl-C) is raised as ``PromptAbortedError`` and never replaced by a
default value.
"""

from collections.abc import Sequence

import click
import structlog

from launchpad.exceptions import PromptAbortedError

log = structlog.get_logger(__name__)


class ClickPrompter:
    """Prompter backed by ``click.prompt``.

    Example:
        >>> prompter = ClickPrompter()
        >>> prompter.ask_with("Connection name", default="production")
        'production'
    """

    def ask_with(
        self,
        question: str,
        default: str | None = None,
        choices: Sequence[str] | None = None,
    ) -> str:
        """Ask a question, optionally restricted to a fixed list of answers.

        Args:
            question: Text shown to the operator.
            default: Answer used when the operator just presses enter.
            choices: If given, only one of these answers is accepted.

        Returns:
            The operator's answer.

        Raises:
            PromptAbortedError: If no answer could be read.
        """
        prompt_type = click.Choice(list(choices)) if choices else None
        try:
            answer = click.prompt(question, default=default, type=prompt_type)
        except (click.Abort, EOFError) as e:
            log.warning("prompt_aborted", question=question)
            raise PromptAbortedError("Prompt was aborted before an answer was given") from e

        return str(answer)

    def ask_secretly(self, question: str) -> str:
        """Ask a question without echoing the answer.

        An empty answer is accepted (e.g. a key without a keyphrase).

        Raises:
            PromptAbortedError: If no answer could be read.
        """
        try:
            answer = click.prompt(question, default="", show_default=False, hide_input=True)
        except (click.Abort, EOFError) as e:
            log.warning("prompt_aborted", question=question)
            raise PromptAbortedError("Prompt was aborted before an answer was given") from e

        return str(answer)
