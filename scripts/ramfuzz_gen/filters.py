"""
Eligibility filters

Decide which classes and which of their members get harness stubs.
"""

from .ir import Access, ClassInfo, MemberInfo, MemberKind


def is_eligible_class(cls: ClassInfo) -> bool:
    """Check if a class gets a harness

    The class must be defined in the main file, must not live in an anonymous
    namespace, and must have a public member function somewhere in its
    declaration subtree. A class that qualifies only through a nested type
    still gets a (stub-less) harness.
    """
    return (cls.in_main_file
            and not cls.in_anonymous_namespace
            and cls.has_public_method)


def is_eligible_member(member: MemberInfo) -> bool:
    """Check if a member gets a stub: public, non-static, not a destructor"""
    return (member.kind is not MemberKind.DESTRUCTOR
            and member.access is Access.PUBLIC
            and not member.is_static)

