"""
IR (Intermediate Representation) module

Represents the classes and member functions found in one C++ translation unit.
"""

from dataclasses import dataclass, field
from enum import Enum
import json


class MemberKind(Enum):
    """Kind of a member function"""
    CONSTRUCTOR = 'constructor'
    DESTRUCTOR = 'destructor'
    METHOD = 'method'


class Access(Enum):
    """C++ access specifier"""
    PUBLIC = 'public'
    PROTECTED = 'protected'
    PRIVATE = 'private'


@dataclass
class MemberInfo:
    """Member function (or constructor/destructor) of a class"""
    name: str
    kind: MemberKind
    access: Access
    is_static: bool = False
    is_implicit: bool = False


@dataclass
class ClassInfo:
    """Class declaration information"""
    qualified_name: str
    name: str
    members: list[MemberInfo] = field(default_factory=list)
    in_anonymous_namespace: bool = False
    in_main_file: bool = True
    # Any public member function in the declaration subtree, nested types included
    has_public_method: bool = False


@dataclass
class TranslationUnit:
    """Intermediate representation of a C++ source file"""
    source: str
    classes: list[ClassInfo] = field(default_factory=list)

    @classmethod
    def load(cls, json_path: str) -> 'TranslationUnit':
        """Load IR from a JSON file"""
        with open(json_path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'TranslationUnit':
        """Create IR from a dictionary"""
        classes = [cls._parse_class(c) for c in data.get('classes', [])]
        return cls(source=data.get('source', ''), classes=classes)

    @staticmethod
    def _parse_class(decl: dict) -> ClassInfo:
        """Parse class declaration"""
        members = []
        for m in decl.get('members', []):
            members.append(MemberInfo(
                name=m['name'],
                kind=MemberKind(m['kind']),
                access=Access(m['access']),
                is_static=m.get('is_static', False),
                is_implicit=m.get('is_implicit', False),
            ))
        return ClassInfo(
            qualified_name=decl.get('qualified_name', decl['name']),
            name=decl['name'],
            members=members,
            in_anonymous_namespace=decl.get('in_anonymous_namespace', False),
            in_main_file=decl.get('in_main_file', True),
            has_public_method=decl.get('has_public_method', False),
        )

    def to_dict(self) -> dict:
        """Convert IR back to a JSON-compatible dictionary"""
        classes = []
        for c in self.classes:
            classes.append({
                'qualified_name': c.qualified_name,
                'name': c.name,
                'in_anonymous_namespace': c.in_anonymous_namespace,
                'in_main_file': c.in_main_file,
                'has_public_method': c.has_public_method,
                'members': [{
                    'name': m.name,
                    'kind': m.kind.value,
                    'access': m.access.value,
                    'is_static': m.is_static,
                    'is_implicit': m.is_implicit,
                } for m in c.members],
            })
        return {'source': self.source, 'classes': classes}

    def save(self, json_path: str):
        """Write IR to a JSON file"""
        with open(json_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

