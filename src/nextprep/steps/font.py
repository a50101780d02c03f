"""Swap the ``next/font/google`` Geist fonts for the ``geist`` package.

The root layout generated by create-next-app declares ``geistSans`` and
``geistMono`` via ``Geist()``/``Geist_Mono()``. Both expose the same
``--font-geist-*`` CSS variables as ``GeistSans``/``GeistMono`` from the
``geist`` package, so only the imports and references change.
"""

from __future__ import annotations

import re

from nextprep.domain.manifest import has_package
from nextprep.infrastructure import manifest_store
from nextprep.infrastructure.filesystem import find_file_path, read_text, write_text
from nextprep.services.result import StepResult, StepStatus
from nextprep.steps.base import EDIT_ERRORS, Step, StepContext

_TEMPLATE = "geist-imports.tsx.j2"

_GOOGLE_IMPORT = re.compile(
    r"^import\s*\{\s*Geist\s*,\s*Geist_Mono\s*\}\s*from\s*[\"']next/font/google[\"'];?[ \t]*\n",
    re.MULTILINE,
)
_CONSTRUCTOR = re.compile(
    r"^const\s+geist(?:Sans|Mono)\s*=\s*Geist(?:_Mono)?\(\{.*?\}\);?[ \t]*\n(?:[ \t]*\n)?",
    re.MULTILINE | re.DOTALL,
)
_REFERENCES = {
    re.compile(r"\bgeistSans\.variable\b"): "GeistSans.variable",
    re.compile(r"\bgeistMono\.variable\b"): "GeistMono.variable",
}
_SWAPPED_MARKER = "geist/font/sans"


def swap_geist_fonts(layout: str, imports: str) -> str:
    """Rewrite *layout* source to use the ``geist`` package.

    *imports* replaces the ``next/font/google`` import line in place.
    """
    result = _GOOGLE_IMPORT.sub(lambda _: imports, layout, count=1)
    result = _CONSTRUCTOR.sub("", result)
    for pattern, replacement in _REFERENCES.items():
        result = pattern.sub(replacement, result)
    return result


class FontStep(Step):
    name = "font"
    description = "Replace next/font/google Geist with the geist package"

    def run(self, ctx: StepContext) -> StepResult:
        cfg = ctx.settings.font
        layout = find_file_path(ctx.project_root, cfg.candidates, description="root layout")
        if layout is None:
            msg = f"Could not find root layout ({', '.join(cfg.candidates)})"
            return self.result(StepStatus.WARNING, msg, warnings=[msg])

        path = layout.relative_to(ctx.project_root).as_posix()
        try:
            content = read_text(layout)
        except EDIT_ERRORS as exc:
            return self.manual_fallback(ctx, exc, "root layout")
        swapped = _SWAPPED_MARKER in content
        if not swapped and not _GOOGLE_IMPORT.search(content):
            msg = f"{path} does not use the default Geist fonts; swap them manually"
            ctx.log.warning("unrecognised layout", path=path)
            return self.result(StepStatus.WARNING, msg, warnings=[msg], path=path)

        if swapped and has_package(manifest_store.load(ctx.project_root), cfg.package):
            return self.result(StepStatus.UNCHANGED, "Fonts already swapped", path=path)

        if not ctx.prompter.confirm(f"Swap Geist fonts in {path} to the '{cfg.package}' package?"):
            return self.declined()

        installed = self.install_missing(ctx, [cfg.package], dev=False)

        if not swapped:
            imports = ctx.templates.get_template(_TEMPLATE).render()
            try:
                write_text(layout, swap_geist_fonts(content, imports))
            except EDIT_ERRORS as exc:
                return self.manual_fallback(ctx, exc, "root layout")
            ctx.log.info("layout fonts swapped", path=path)

        return self.result(
            StepStatus.SUCCESS,
            "Fonts swapped",
            path=path,
            installed=installed,
            layout_rewritten=not swapped,
        )
