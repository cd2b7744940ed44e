from __future__ import annotations
from typing import Dict, List, Sequence

from ..domain.models import AssembledPrompt, FilePreview

# =========================
# TASK PROMPT
# =========================

TASK_PREAMBLE = (
    "You are an expert Tools & Data Science assistant.\n"
    "The user asks a task and has uploaded files. "
    "Perform the user-specified action on the uploaded files."
)

TASK_DIRECTIVES = (
    "Important:\n"
    "- Use the uploaded file content when relevant to complete the TASK.\n"
    "- If a file was not readable, say so.\n"
    "- Output only a clear result and, if asked, include code snippets or analysis.\n"
    "Format your response with:\n"
    "**FINAL ANSWER:** [result]\n"
    "Confidence: [High/Medium/Low]"
)


def render_file_block(preview: FilePreview) -> str:
    return (
        f"File: {preview.name}\n"
        f"Type: {preview.media_type}\n"
        f"ContentPreview:\n{preview.text}"
    )


def build_task_prompt(task: str, previews: Sequence[FilePreview]) -> AssembledPrompt:
    """
    Render the single prompt string sent as model input.

    Pure: equal (task, previews) always give a byte-identical `rendered`.
    File blocks keep the order of `previews`.
    """
    task_text = (task or "").strip()
    ordered = tuple(previews)
    file_section = "\n\n".join(render_file_block(p) for p in ordered)

    rendered = (
        f"{TASK_PREAMBLE}\n\n"
        f"TASK:\n{task_text}\n\n"
        f"UPLOADED FILES:\n{file_section}\n\n"
        f"{TASK_DIRECTIVES}\n"
    )
    return AssembledPrompt(task=task_text, previews=ordered, rendered=rendered)


def build_messages(prompt: AssembledPrompt) -> List[Dict[str, str]]:
    """Message-list form of the prompt, for `input_format="messages"`."""
    return [{"role": "user", "content": prompt.rendered}]


# =========================
# CONNECTION PROBE
# =========================

PROBE_PROMPT = "Reply with exactly: OK"


def build_probe_prompt() -> AssembledPrompt:
    return AssembledPrompt(task=PROBE_PROMPT, previews=(), rendered=PROBE_PROMPT)
