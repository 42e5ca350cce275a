"""
ramfuzz_gen - fuzzing harness scaffolding for C++ classes

Reads class declarations from clang's JSON AST dump and generates one
ramfuzz::RF__<Class> wrapper per eligible class: a stub per public
constructor and instance method, plus a dispatch table of method stubs.
"""

from .ir import TranslationUnit, ClassInfo, MemberInfo, MemberKind, Access
from .codegen import CodeGen, valident
from .filters import is_eligible_class, is_eligible_member
from .harness import HarnessDescriptor, HarnessStub, build_descriptor, harness_name
from .emitter import HarnessEmitter, emit
from .clang_ast import ClangTool, IRFileTool, FrontendError, read_ast
from .generator import Generator, GenerationResult, generate_from_ir, ramfuzz, ramfuzz_sources

__all__ = [
    'TranslationUnit', 'ClassInfo', 'MemberInfo', 'MemberKind', 'Access',
    'CodeGen', 'valident',
    'is_eligible_class', 'is_eligible_member',
    'HarnessDescriptor', 'HarnessStub', 'build_descriptor', 'harness_name',
    'HarnessEmitter', 'emit',
    'ClangTool', 'IRFileTool', 'FrontendError', 'read_ast',
    'Generator', 'GenerationResult', 'generate_from_ir', 'ramfuzz', 'ramfuzz_sources',
]
