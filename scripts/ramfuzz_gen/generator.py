"""
Main generator module

Runs the front end on translation units and writes harness declarations for
every eligible class.
"""

import io
import logging
import os
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import TextIO

from .clang_ast import ClangTool, FrontendError
from .codegen import CodeGen
from .emitter import HarnessEmitter
from .filters import is_eligible_class
from .harness import build_descriptor
from .ir import ClassInfo, TranslationUnit

logger = logging.getLogger(__name__)

# Standard headers included before the analyzed sources
PREAMBLE_HEADERS = ['memory']


@dataclass
class GenerationResult:
    """Outcome of generating harnesses for a single unit"""
    ok: bool
    text: str = ''
    error: str = ''

    @classmethod
    def success(cls, text: str) -> 'GenerationResult':
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, error: str) -> 'GenerationResult':
        return cls(ok=False, error=error)


class Generator:
    """Writes harness declarations for the eligible classes of a unit"""

    def __init__(self, out: TextIO, emitter: HarnessEmitter | None = None):
        self.out = out
        self.emitter = emitter or HarnessEmitter()
        self.class_count = 0

    def generate(self, unit: TranslationUnit):
        """Generate harnesses for all classes, in declaration order"""
        for cls in unit.classes:
            self.generate_class(cls)

    def generate_class(self, cls: ClassInfo) -> bool:
        """Generate the harness for one class, if it is eligible"""
        if not is_eligible_class(cls):
            logger.debug('skipping %s', cls.qualified_name)
            return False

        desc = build_descriptor(cls)
        gen = CodeGen()
        self.emitter.generate(desc, gen)
        # One write per class keeps each block contiguous
        self.out.write(gen.output())
        self.class_count += 1
        logger.debug('%s => %s (%d stubs)', cls.qualified_name, desc.type_name, len(desc.stubs))
        return True


def generate_from_ir(unit: TranslationUnit) -> str:
    """Generate harness code for an already-built IR"""
    out = io.StringIO()
    Generator(out).generate(unit)
    return out.getvalue()


def ramfuzz(code: str, tool: ClangTool | None = None) -> GenerationResult:
    """Generate harness code for in-memory C++ source"""
    tool = tool or ClangTool()
    try:
        unit = tool.parse_code(code)
    except FrontendError as e:
        logger.warning('%s', e)
        return GenerationResult.failure(str(e))
    return GenerationResult.success(generate_from_ir(unit))


def write_preamble(sources: list[str], out: TextIO):
    """Write standard includes and one include per source"""
    for header in PREAMBLE_HEADERS:
        out.write(f'#include <{header}>\n')
    for source in sources:
        out.write(f'#include "{source}"\n')


def _parse_source(tool, source: str) -> tuple[str, TranslationUnit | None, str]:
    """Parse one source. Returns (source, unit, error)"""
    try:
        return source, tool.parse_file(source), ''
    except FrontendError as e:
        return source, None, str(e)


def ramfuzz_sources(tool, sources: list[str], out: TextIO, jobs: int = 1,
                    ir_dir: str | None = None) -> int:
    """Generate harness code for several source files

    Writes the preamble, then each unit's harnesses in source order. Units
    that fail to parse contribute nothing. Returns 0 on success, 1 if any
    unit failed.
    """
    write_preamble(sources, out)

    if jobs > 1 and len(sources) > 1:
        with ProcessPoolExecutor(max_workers=jobs) as executor:
            results = list(executor.map(_parse_source, [tool] * len(sources), sources))
    else:
        results = [_parse_source(tool, source) for source in sources]

    failed = []
    for source, unit, error in results:
        if unit is None:
            logger.warning('%s', error)
            failed.append(source)
            continue
        if ir_dir:
            os.makedirs(ir_dir, exist_ok=True)
            unit.save(os.path.join(ir_dir, os.path.basename(source) + '.json'))
        gen = Generator(out)
        gen.generate(unit)
        logger.info('%s: %d harness(es)', source, gen.class_count)

    return 1 if failed else 0
