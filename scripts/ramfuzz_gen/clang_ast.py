"""
Clang AST front end

Builds the IR from the JSON AST dump produced by clang++.
"""

import json
import logging
import os
import subprocess
import tempfile

from .ir import Access, ClassInfo, MemberInfo, MemberKind, TranslationUnit

logger = logging.getLogger(__name__)

# Default file name for code parsed from a string
DEFAULT_CODE_FILENAME = 'input.cc'

MEMBER_KINDS = {
    'CXXConstructorDecl': MemberKind.CONSTRUCTOR,
    'CXXDestructorDecl': MemberKind.DESTRUCTOR,
    'CXXMethodDecl': MemberKind.METHOD,
    'CXXConversionDecl': MemberKind.METHOD,
}

# Allocation functions are static even without a storage class
IMPLICIT_STATIC_OPERATORS = {
    'operator new', 'operator new[]', 'operator delete', 'operator delete[]',
}

# Declarations whose templated member inherits the enclosing access
TEMPLATE_KINDS = {'FunctionTemplateDecl', 'ClassTemplateDecl'}


class FrontendError(RuntimeError):
    """Raised when a source file cannot be turned into IR"""

    def __init__(self, source: str, message: str):
        super().__init__(f'{source}: {message}')
        self.source = source


def default_access(decl: dict) -> Access:
    """Access of members before the first access specifier of a record"""
    if decl.get('definitionData', {}).get('isLambda'):
        return Access.PUBLIC
    return Access.PRIVATE if decl.get('tagUsed') == 'class' else Access.PUBLIC


def is_static_member(decl: dict) -> bool:
    """Check if a member function has no implicit object parameter"""
    if decl.get('storageClass') == 'static':
        return True
    return decl.get('kind') == 'CXXMethodDecl' and decl.get('name') in IMPLICIT_STATIC_OPERATORS


def find_clang() -> str:
    """Get clang++ executable (CLANGPP environment variable or PATH)"""
    return os.environ.get('CLANGPP', 'clang++')


class _LocationTracker:
    """Follows the current file while reading a JSON AST dump

    clang only writes "file" (and "includedFrom") when a location is in a
    different file than the previous location written, so nodes must be
    visited in document order.
    """

    def __init__(self):
        self.file = ''
        self.included = False

    def _update(self, loc: dict):
        if 'file' in loc:
            self.file = loc['file']
            self.included = 'includedFrom' in loc

    def visit(self, loc: dict) -> bool:
        """Consume a location, return True if it expands in the main file"""
        if not loc:
            return False
        if 'spellingLoc' in loc or 'expansionLoc' in loc:
            self._update(loc.get('spellingLoc', {}))
            self._update(loc.get('expansionLoc', {}))
        else:
            self._update(loc)
        return bool(self.file) and not self.included

    def visit_node(self, node: dict) -> bool:
        """Consume a node's location and range, return main-file status of its location"""
        in_main = self.visit(node.get('loc', {}))
        rng = node.get('range', {})
        self.visit(rng.get('begin', {}))
        self.visit(rng.get('end', {}))
        return in_main


class AstReader:
    """Collects classes from a clang JSON AST dump"""

    def __init__(self, source: str):
        self.unit = TranslationUnit(source=source)
        self._locs = _LocationTracker()

    def read(self, ast: dict) -> TranslationUnit:
        self._visit_scope(ast, [], False)
        return self.unit

    def _visit_scope(self, node: dict, scope: list[str], anonymous: bool):
        """Visit declarations of a namespace-like scope"""
        for decl in node.get('inner', []):
            kind = decl.get('kind')
            if kind == 'NamespaceDecl':
                self._locs.visit_node(decl)
                name = decl.get('name')
                self._visit_scope(decl, scope + [name or '(anonymous namespace)'],
                                  anonymous or name is None)
            elif kind == 'LinkageSpecDecl':
                self._locs.visit_node(decl)
                self._visit_scope(decl, scope, anonymous)
            elif kind == 'CXXRecordDecl':
                self._visit_record(decl, scope, anonymous)
            else:
                self._scan(decl)

    def _visit_record(self, decl: dict, scope: list[str], anonymous: bool) -> bool:
        """Visit a record, return True if its subtree has a public member function"""
        in_main = self._locs.visit_node(decl)
        name = decl.get('name')

        cls = None
        if name and decl.get('completeDefinition') and not decl.get('isImplicit'):
            cls = ClassInfo(
                qualified_name='::'.join(scope + [name]),
                name=name,
                in_anonymous_namespace=anonymous,
                in_main_file=in_main,
            )
            # Outer classes precede their nested classes
            self.unit.classes.append(cls)

        access = default_access(decl)
        nested_scope = scope + [name or '(anonymous)']
        has_public = False

        for child in decl.get('inner', []):
            kind = child.get('kind')
            if kind == 'AccessSpecDecl':
                self._locs.visit_node(child)
                access = Access(child['access'])
                continue

            child_access = Access(child['access']) if 'access' in child else access
            if kind in MEMBER_KINDS:
                self._locs.visit_node(child)
                if cls is not None:
                    cls.members.append(MemberInfo(
                        name=child.get('name', ''),
                        kind=MEMBER_KINDS[kind],
                        access=child_access,
                        is_static=is_static_member(child),
                        is_implicit=child.get('isImplicit', False),
                    ))
                if child_access is Access.PUBLIC:
                    has_public = True
                # Bodies may hold local classes and lambdas
                if self._scan_inner(child, None):
                    has_public = True
            elif kind == 'CXXRecordDecl':
                if self._visit_record(child, nested_scope, anonymous):
                    has_public = True
            elif self._scan(child, child_access.value):
                has_public = True

        if cls is not None:
            cls.has_public_method = has_public
        logger.debug('record %s: main=%s public=%s', '::'.join(nested_scope), in_main, has_public)
        return has_public

    def _scan(self, node: dict, access: str | None = None) -> bool:
        """Walk a subtree without collecting classes

        Returns True if the subtree has a public member function.
        """
        if node.get('kind') == 'CXXRecordDecl':
            return self._scan_record(node)
        self._locs.visit_node(node)
        found = node.get('kind') in MEMBER_KINDS and node.get('access', access) == 'public'
        inherited = access if node.get('kind') in TEMPLATE_KINDS else None
        if self._scan_inner(node, inherited):
            found = True
        return found

    def _scan_record(self, decl: dict) -> bool:
        """Walk a local or templated record, tracking its access specifiers"""
        self._locs.visit_node(decl)
        access = default_access(decl)
        found = False
        for child in decl.get('inner', []):
            if child.get('kind') == 'AccessSpecDecl':
                self._locs.visit_node(child)
                access = Access(child['access'])
            elif self._scan(child, access.value):
                found = True
        return found

    def _scan_inner(self, node: dict, access: str | None) -> bool:
        found = False
        for child in node.get('inner', []):
            if self._scan(child, access):
                found = True
        return found


def read_ast(ast: dict, source: str) -> TranslationUnit:
    """Build IR from a parsed JSON AST dump"""
    return AstReader(source).read(ast)


class ClangTool:
    """Runs clang++ on source files and reads back their AST"""

    def __init__(self, compiler: str | None = None, std: str = 'c++11',
                 include_paths: list[str] | None = None,
                 defines: list[str] | None = None,
                 extra_args: list[str] | None = None):
        self.compiler = compiler or find_clang()
        self.std = std
        self.include_paths = include_paths or []
        self.defines = defines or []
        self.extra_args = extra_args or []

    def command(self, path: str) -> list[str]:
        """Build the clang++ command line for a source file"""
        cmd = [self.compiler, '-x', 'c++', f'-std={self.std}', '-fsyntax-only',
               '-Xclang', '-ast-dump=json']
        for inc in self.include_paths:
            cmd.extend(['-I', inc])
        for define in self.defines:
            cmd.append(f'-D{define}')
        cmd.extend(self.extra_args)
        cmd.append(path)
        return cmd

    def dump_ast(self, path: str) -> dict:
        """Run clang++ to get AST dump"""
        cmd = self.command(path)
        logger.debug('running %s', ' '.join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True)
        except OSError as e:
            raise FrontendError(path, f'cannot run {self.compiler}: {e}') from e
        if result.returncode != 0:
            stderr = result.stderr.decode('utf-8', errors='replace').strip()
            raise FrontendError(path, stderr or f'{self.compiler} exited with {result.returncode}')
        try:
            return json.loads(result.stdout)
        except ValueError as e:
            raise FrontendError(path, f'invalid AST dump: {e}') from e

    def parse_file(self, path: str) -> TranslationUnit:
        """Generate IR for a source file"""
        return read_ast(self.dump_ast(path), path)

    def parse_code(self, code: str, filename: str = DEFAULT_CODE_FILENAME) -> TranslationUnit:
        """Generate IR for in-memory source code"""
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, filename)
            with open(path, 'w', newline='\n') as f:
                f.write(code)
            unit = self.parse_file(path)
        unit.source = filename
        return unit


class IRFileTool:
    """Reads IR saved as JSON instead of running clang++"""

    def parse_file(self, path: str) -> TranslationUnit:
        try:
            return TranslationUnit.load(path)
        except (OSError, ValueError, KeyError) as e:
            raise FrontendError(path, f'cannot load IR: {e}') from e
