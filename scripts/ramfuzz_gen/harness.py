"""
Harness descriptor module

Collects the shape of the generated wrapper for one class: which stubs it
declares, how they are named, and how large its dispatch table is.
"""

from collections import defaultdict
from dataclasses import dataclass, field

from .codegen import valident
from .filters import is_eligible_member
from .ir import ClassInfo, MemberInfo, MemberKind

# Prefix for generated wrapper class names
HARNESS_PREFIX = 'RF__'


@dataclass
class HarnessStub:
    """One generated stub: an eligible member and its unique name"""
    member: MemberInfo
    base: str
    index: int

    @property
    def name(self) -> str:
        return f'{self.base}{self.index}'

    @property
    def is_constructor(self) -> bool:
        return self.member.kind is MemberKind.CONSTRUCTOR


@dataclass
class HarnessDescriptor:
    """Shape of the wrapper generated for one class"""
    type_name: str
    class_name: str
    stubs: list[HarnessStub] = field(default_factory=list)
    ctor_count: int = 0
    method_count: int = 0

    @property
    def has_constructors(self) -> bool:
        return self.ctor_count > 0


def harness_name(cls: ClassInfo) -> str:
    """Get wrapper class name for a class

    Examples:
        Widget -> RF__Widget
        ns::Widget -> RF__Widget
    """
    return HARNESS_PREFIX + cls.name


def build_descriptor(cls: ClassInfo) -> HarnessDescriptor:
    """Build the harness descriptor for a class

    Only direct members are visited, in declaration order. Overloads sharing a
    mangled base get increasing indices starting at 0.
    """
    desc = HarnessDescriptor(type_name=harness_name(cls), class_name=cls.qualified_name)
    name_counts = defaultdict(int)

    for member in cls.members:
        if not is_eligible_member(member):
            continue
        base = valident(member.name)
        desc.stubs.append(HarnessStub(member=member, base=base, index=name_counts[base]))
        name_counts[base] += 1

        if member.kind is MemberKind.CONSTRUCTOR:
            desc.ctor_count += 1
        elif member.kind is MemberKind.METHOD:
            desc.method_count += 1

    return desc
