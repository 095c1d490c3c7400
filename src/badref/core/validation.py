"""Owner reference validation.

This module walks every object's declared owner references against the
object catalog and classifies each edge. Every anomaly is returned as a
Finding value; nothing here raises or prints, so the same logic can be
reused by the CLI, automation and tests.

Rules applied to each resolved reference:
    - at most one controller reference per object
    - a cluster-scoped object may not be owned by a namespaced object
    - namespaced owner and dependent must share a namespace
    - the cached kind, name and apiVersion must match the owner
      (case-insensitively)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from badref.core.objects import ObjectDescriptor, OwnerRef


class Severity(str, Enum):
    """
    Severity of a finding.

    Values:
        INFO: Worth reporting, but never affects the exit status.
        ERROR: Can cause incorrect or premature garbage collection.
    """

    INFO = "INFO"
    ERROR = "ERROR"


class FindingCategory(str, Enum):
    """Kind of ownership anomaly a finding describes."""

    DANGLING_OWNER = "DanglingOwner"
    MULTIPLE_CONTROLLERS = "MultipleControllers"
    CROSS_SCOPE_OWNERSHIP = "CrossScopeOwnership"
    CROSS_NAMESPACE_OWNERSHIP = "CrossNamespaceOwnership"
    STALE_OWNER_METADATA = "StaleOwnerMetadata"


@dataclass(frozen=True)
class Finding:
    """
    A single anomaly found while validating owner references.

    Attributes:
        severity: INFO or ERROR.
        category: What rule the finding is about.
        namespace: Namespace of the dependent object ("" if cluster-scoped).
        kind: Kind of the dependent object.
        name: Name of the dependent object.
        subject: Display identity of the dependent object.
        owner: Display identity of the related owner, if any.
        message: Human-readable description.
    """

    severity: Severity
    category: FindingCategory
    namespace: str
    kind: str
    name: str
    subject: str
    message: str
    owner: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation pass over a catalog."""

    findings: tuple[Finding, ...]
    scanned_objects: int
    scanned_owner_refs: int

    @property
    def has_errors(self) -> bool:
        """Return True if any ERROR-level finding exists."""
        return any(f.severity == Severity.ERROR for f in self.findings)

    @property
    def exit_code(self) -> int:
        """Return the process exit status for this result (INFO never counts)."""
        return 1 if self.has_errors else 0

    def count(self, severity: Severity) -> int:
        """Return the number of findings with the given severity."""
        return sum(1 for f in self.findings if f.severity == severity)


def _finding(
    obj: ObjectDescriptor,
    severity: Severity,
    category: FindingCategory,
    message: str,
    owner: str | None = None,
) -> Finding:
    return Finding(
        severity=severity,
        category=category,
        namespace=obj.namespace,
        kind=obj.kind,
        name=obj.name,
        subject=obj.kind_namespace_name,
        owner=owner,
        message=message,
    )


def _check_scope(obj: ObjectDescriptor, owner: ObjectDescriptor) -> list[Finding]:
    """Scope and namespace containment rules."""
    found: list[Finding] = []
    if not obj.is_namespaced and owner.is_namespaced:
        found.append(
            _finding(
                obj,
                Severity.ERROR,
                FindingCategory.CROSS_SCOPE_OWNERSHIP,
                f"Non-namespaced {obj.kind_namespace_name} is owned by "
                f"namespaced {owner.kind_namespace_name}",
                owner=owner.kind_namespace_name,
            )
        )
    if obj.is_namespaced and owner.is_namespaced and obj.namespace != owner.namespace:
        found.append(
            _finding(
                obj,
                Severity.ERROR,
                FindingCategory.CROSS_NAMESPACE_OWNERSHIP,
                f"Namespaced {obj.kind_namespace_name} is owned by object in "
                f"another namespace {owner.kind_namespace_name}",
                owner=owner.kind_namespace_name,
            )
        )
    return found


def _check_identity(
    obj: ObjectDescriptor, ref: OwnerRef, owner: ObjectDescriptor
) -> list[Finding]:
    """Compare the identity cached on the reference with the owner's actual one."""
    found: list[Finding] = []
    pairs = (
        ("kind", ref.kind, owner.kind),
        ("name", ref.name, owner.name),
        ("apiVersion", ref.api_version, owner.api_version),
    )
    for field_name, cached, actual in pairs:
        if cached.lower() == actual.lower():
            continue
        found.append(
            _finding(
                obj,
                Severity.ERROR,
                FindingCategory.STALE_OWNER_METADATA,
                f"In object {obj.kind_namespace_name}, owner ref {field_name} "
                f"({cached}) does not match owner {owner.kind_namespace_name} "
                f"({actual})",
                owner=owner.kind_namespace_name,
            )
        )
    return found


def _validate_object(
    obj: ObjectDescriptor, catalog: Mapping[str, ObjectDescriptor]
) -> tuple[list[Finding], int]:
    """Validate one object's references; return (findings, resolved reference count)."""
    found: list[Finding] = []
    resolved = 0
    has_controller = False

    for ref in obj.owner_references:
        owner = catalog.get(ref.uid)
        if owner is None:
            found.append(
                _finding(
                    obj,
                    Severity.INFO,
                    FindingCategory.DANGLING_OWNER,
                    f"Couldn't find owner {ref.kind}/{ref.name} (uid {ref.uid}) "
                    f"for {obj.kind_namespace_name}",
                    owner=f"{ref.kind}/{ref.name}",
                )
            )
            continue

        resolved += 1

        if ref.is_controller:
            if has_controller:
                found.append(
                    _finding(
                        obj,
                        Severity.ERROR,
                        FindingCategory.MULTIPLE_CONTROLLERS,
                        f"Object {obj.kind_namespace_name} has more than 1 controller",
                        owner=owner.kind_namespace_name,
                    )
                )
            has_controller = True

        found.extend(_check_scope(obj, owner))
        found.extend(_check_identity(obj, ref, owner))

    return found, resolved


def sort_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Return findings ordered by namespace, kind and name (stable within an object)."""
    return sorted(findings, key=lambda f: (f.namespace, f.kind, f.name))


def validate(catalog: Mapping[str, ObjectDescriptor]) -> ValidationResult:
    """
    Validate the owner references of every object in the catalog.

    A reference whose owner is missing from the catalog yields a single
    INFO finding and is not counted as checked. Every other reference is
    counted and run through all rules; the rules do not short-circuit each
    other.

    Args:
        catalog: Objects keyed by uid. Not modified.

    Returns:
        A ValidationResult with sorted findings and scan counters.
    """
    findings: list[Finding] = []
    scanned_objects = 0
    scanned_owner_refs = 0

    for obj in catalog.values():
        scanned_objects += 1
        found, resolved = _validate_object(obj, catalog)
        findings.extend(found)
        scanned_owner_refs += resolved

    return ValidationResult(
        findings=tuple(sort_findings(findings)),
        scanned_objects=scanned_objects,
        scanned_owner_refs=scanned_owner_refs,
    )
