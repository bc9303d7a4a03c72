"""
checks the global consistency of the join locations in a variant store. All problems are collected and
reported together rather than failing on the first
"""
from collections import namedtuple

import networkx as nx

from .config import GRAPH_OPTIONS
from .constants import VIOLATION
from .error import LengthMismatch, NotFound, OutOfBounds, UnanchoredCycle
from .util import DEVNULL


class Violation(namedtuple('Violation', ['id', 'reason', 'message'])):
    """
    a single problem found in the graph

    Attributes:
        id (str): the id of the offending variant
        reason (VIOLATION): the kind of problem
        message (str): human readable description
    """

    def __new__(cls, id, reason, message=''):
        VIOLATION.enforce(reason)
        return super(Violation, cls).__new__(cls, id, reason, message)

    def __str__(self):
        return '{} [{}] {}'.format(self.id, self.reason, self.message)


class ValidationReport:
    """
    the violations found by a validation run
    """

    def __init__(self, violations=None, checked=0, total=0, cancelled=False):
        self.violations = list(violations or [])
        self.checked = checked
        self.total = total
        self.cancelled = cancelled

    @property
    def ok(self):
        """:class:`bool`: True if the full graph was checked and no violations were found"""
        return not self.violations and not self.cancelled

    def __iter__(self):
        return iter(self.violations)

    def __len__(self):
        return len(self.violations)

    def by_reason(self, reason):
        return [v for v in self.violations if v.reason == reason]

    def ids(self, reason=None):
        return {v.id for v in self.violations if reason is None or v.reason == reason}

    def check(self):
        """
        raise the error matching the first violation found

        Raises:
            NotFound: a join references a variant that does not exist
            OutOfBounds: a join position is outside of the referenced variant
            UnanchoredCycle: a variant cannot reach a root
            LengthMismatch: an allele segment gives a length which does not match its variant
        """
        errors = {
            VIOLATION.NOT_FOUND: NotFound,
            VIOLATION.OUT_OF_BOUNDS: OutOfBounds,
            VIOLATION.UNANCHORED_CYCLE: UnanchoredCycle,
            VIOLATION.LENGTH_MISMATCH: LengthMismatch
        }
        if self.violations:
            first = self.violations[0]
            raise errors[first.reason](first.message, first.id)
        return self

    def __repr__(self):
        return 'ValidationReport(violations={}, checked={}/{}{})'.format(
            len(self.violations), self.checked, self.total, ', cancelled' if self.cancelled else '')


def join_reference_graph(store):
    """
    Returns:
        networkx.DiGraph: directed graph of variant ids with an edge from each variant to every existing variant its
        joins reference. The self references of root variants are not included
    """
    graph = nx.DiGraph()
    for variant in store:
        graph.add_node(variant.id)
        if store.is_root(variant.id):
            continue
        for join in variant.joins():
            if join.variant_id in store:
                graph.add_edge(variant.id, join.variant_id)
    return graph


def _check_joins(store, variant):
    violations = []
    for name, join in [('start_join', variant.start_join), ('end_join', variant.end_join)]:
        if join.variant_id not in store:
            violations.append(Violation(
                variant.id, VIOLATION.NOT_FOUND,
                '{} references a variant that does not exist: {}'.format(name, join.variant_id)
            ))
            continue
        length = len(store.get(join.variant_id))
        if join.position >= length:
            violations.append(Violation(
                variant.id, VIOLATION.OUT_OF_BOUNDS,
                '{} position {} is outside of {} (length {})'.format(name, join.position, join.variant_id, length)
            ))
    return violations


def _check_segments(store, allele):
    violations = []
    for index, segment in enumerate(allele.segments):
        if segment.variant_id not in store:
            violations.append(Violation(
                allele.id, VIOLATION.NOT_FOUND,
                'segment {} references a variant that does not exist: {}'.format(index, segment.variant_id)
            ))
            continue
        length = len(store.get(segment.variant_id))
        try:
            lo, hi = segment.bounds(length)
        except OutOfBounds:
            violations.append(Violation(
                allele.id, VIOLATION.OUT_OF_BOUNDS,
                'segment {} ({}) extends past the end of {} (length {})'.format(
                    index, segment, segment.variant_id, length)
            ))
            continue
        except LengthMismatch:
            violations.append(Violation(
                allele.id, VIOLATION.LENGTH_MISMATCH,
                'segment {} ({}) gives length {} but {} has length {}'.format(
                    index, segment, segment.length, segment.variant_id, length)
            ))
            continue
        if lo == hi:
            violations.append(Violation(
                allele.id, VIOLATION.OUT_OF_BOUNDS,
                'segment {} ({}) does not cover any bases of {}'.format(index, segment, segment.variant_id)
            ))
    return violations


def validate(store, cancel=None, log=DEVNULL):
    """
    check every variant in the store for dangling join references, join positions outside of the referenced
    sequence and variants which are not anchored to a root. The segments of registered alleles are then checked
    against the bounds of the variants they reference

    Args:
        store (GraphSnapshot): the store (or snapshot) to validate. it is not modified
        cancel (threading.Event): when set the validation stops between records and returns the partial report
        log (Log): logging function

    Returns:
        ValidationReport: all violations found
    """
    graph = store.snapshot()
    variants = list(graph)
    alleles = list(graph.alleles.values())
    report = ValidationReport(total=len(variants) + len(alleles))
    if not variants:
        return report

    roots = set(graph.roots())
    references = join_reference_graph(graph)
    anchored = set(roots)
    for root in roots:
        anchored.update(nx.ancestors(references, root))
    if not roots:
        log('warning: the graph does not contain a root variant')

    interval = max(1, GRAPH_OPTIONS.validation_log_interval)
    records = [(v, _check_joins) for v in variants] + [(a, _check_segments) for a in alleles]
    for index, (record, check_record) in enumerate(records):
        if cancel is not None and cancel.is_set():
            log('validation cancelled after checking {} of {} records'.format(index, report.total))
            report.cancelled = True
            break
        if index and index % interval == 0:
            log('checked {} of {} records'.format(index, report.total), time_stamp=True)

        report.violations.extend(check_record(graph, record))
        if check_record is _check_joins and record.id not in anchored:
            if roots:
                message = 'cannot reach a root variant by following join references'
            else:
                message = 'the graph has no root variant to anchor to'
            report.violations.append(Violation(record.id, VIOLATION.UNANCHORED_CYCLE, message))
        report.checked += 1
    log('validated {} variants and {} alleles: {} violation(s)'.format(
        min(report.checked, len(variants)), max(report.checked - len(variants), 0), len(report.violations)))
    return report


def unanchored_cycles(store):
    """
    Returns:
        list of list of str: cycles of join references between variants that cannot reach a root
    """
    graph = store.snapshot()
    references = join_reference_graph(graph)
    anchored = set()
    for root in graph.roots():
        anchored.add(root)
        anchored.update(nx.ancestors(references, root))
    cycles = []
    for component in nx.strongly_connected_components(references):
        if component & anchored:
            continue
        if len(component) > 1 or any([references.has_edge(n, n) for n in component]):
            cycles.append(sorted(component))
    return sorted(cycles)
