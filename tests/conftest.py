# tests/conftest.py
"""
Shared fixtures and IR/AST builders for the ramfuzz_gen test suite.
"""

import shutil

import pytest

from ramfuzz_gen.ir import Access, ClassInfo, MemberInfo, MemberKind, TranslationUnit


def member(name, kind=MemberKind.METHOD, access=Access.PUBLIC, is_static=False):
    return MemberInfo(name=name, kind=kind, access=access, is_static=is_static)


def ctor(name, access=Access.PUBLIC):
    return member(name, kind=MemberKind.CONSTRUCTOR, access=access)


def dtor(name, access=Access.PUBLIC):
    return member(name, kind=MemberKind.DESTRUCTOR, access=access)


def make_class(name, members=(), qualified_name=None, **kwargs):
    kwargs.setdefault('has_public_method', any(m.access is Access.PUBLIC for m in members))
    return ClassInfo(
        qualified_name=qualified_name or name,
        name=name,
        members=list(members),
        **kwargs,
    )


def widget_class():
    """Widget(int), spin(), operator+, private hidden(), implicit ~Widget()"""
    return make_class('Widget', [
        ctor('Widget'),
        member('spin'),
        member('operator+'),
        member('hidden', access=Access.PRIVATE),
        dtor('~Widget'),
    ])


WIDGET_HARNESS = """\
namespace ramfuzz {
class RF__Widget {
 private:
  // Owns internally created objects. Must precede obj declaration.
  std::unique_ptr<Widget> pobj;
 public:
  Widget& obj; // Object under test.
  RF__Widget(Widget& obj)
    : obj(obj) {} // Object already created by caller.
  Widget* Widget0();
  void spin0();
  void operatorp0();
  // Creates obj internally, using indicated constructor.
  RF__Widget(unsigned ctr);
  using mptr = void (RF__Widget::*)();
  static mptr roulette[2];
};
} // namespace ramfuzz
"""


# ---------------------------------------------------------------------------
#  clang -ast-dump=json builders
# ---------------------------------------------------------------------------

def loc(line, file=None, included_from=None):
    """A bare source location as written by clang's JSON dumper"""
    out = {'offset': line * 10, 'line': line, 'col': 1, 'tokLen': 1}
    if file is not None:
        out['file'] = file
        if included_from is not None:
            out['includedFrom'] = {'file': included_from}
    return out


def node(kind, line=None, file=None, included_from=None, inner=None, **attrs):
    out = {'id': f'0x{id(attrs):x}', 'kind': kind}
    if line is None:
        out['loc'] = {}
        out['range'] = {'begin': {}, 'end': {}}
    else:
        out['loc'] = loc(line, file, included_from)
        out['range'] = {'begin': {'offset': line * 10, 'col': 1, 'tokLen': 1},
                        'end': {'offset': line * 10 + 5, 'col': 6, 'tokLen': 1}}
    out.update(attrs)
    if inner is not None:
        out['inner'] = inner
    return out


def record(name, line, inner, tag='class', **kwargs):
    body = [node('CXXRecordDecl', line, isImplicit=True, name=name, tagUsed=tag)]
    body.extend(inner)
    return node('CXXRecordDecl', line, name=name, tagUsed=tag,
                completeDefinition=True, inner=body, **kwargs)


def access_spec(access, line):
    return node('AccessSpecDecl', line, access=access)


def method(name, line, kind='CXXMethodDecl', **attrs):
    return node(kind, line, name=name, **attrs)


def translation_unit(*decls):
    builtin = node('TypedefDecl', isImplicit=True, name='__int128_t')
    return {'id': '0x1', 'kind': 'TranslationUnitDecl', 'loc': {},
            'range': {'begin': {}, 'end': {}}, 'inner': [builtin, *decls]}


@pytest.fixture
def widget():
    return widget_class()


@pytest.fixture
def widget_unit():
    return TranslationUnit(source='widget.hpp', classes=[widget_class()])


requires_clang = pytest.mark.skipif(
    shutil.which('clang++') is None, reason='clang++ not available')
