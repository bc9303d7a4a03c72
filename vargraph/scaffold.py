from .error import LengthMismatch
from .util import DEVNULL, generate_id
from .variant import Allele, VariantScaffold


def assemble(alleles, is_forwards, gap_sizes, scaffold_id=None, log=DEVNULL):
    """
    order and orient a set of alleles into a scaffold. The alleles are expected to have been built (and therefore
    checked) already, no further graph validation is done here

    Args:
        alleles (list of Allele|str): the alleles (or allele ids) in scaffold order
        is_forwards (list of bool): for each allele, True if it is read forwards in the scaffold
        gap_sizes (list of int): the number of bases between each consecutive pair of alleles
        scaffold_id (str): the id of the scaffold. One is generated if not given

    Returns:
        VariantScaffold: the new scaffold

    Raises:
        LengthMismatch: the number of orientations does not match the number of alleles, the number of gaps is not
            one fewer than the number of alleles, or a gap size is negative

    Example:
        >>> assemble(['a1', 'a2', 'a3'], [True, False, True], [10, 0])
        VariantScaffold(scaffold-..., alleles=['a1', 'a2', 'a3'])
    """
    allele_ids = [a.id if isinstance(a, Allele) else a for a in alleles]
    is_forwards = list(is_forwards)
    gap_sizes = list(gap_sizes)

    if len(is_forwards) != len(allele_ids):
        raise LengthMismatch(
            'expected one orientation per allele', len(allele_ids), len(is_forwards))
    expected_gaps = max(len(allele_ids) - 1, 0)
    if len(gap_sizes) != expected_gaps:
        raise LengthMismatch(
            'expected {} gap size(s) for {} allele(s)'.format(expected_gaps, len(allele_ids)), len(gap_sizes))
    for gap in gap_sizes:
        if isinstance(gap, bool) or int(gap) != gap or gap < 0:
            raise LengthMismatch('gap sizes must be non-negative integers', gap)

    scaffold = VariantScaffold(
        scaffold_id if scaffold_id is not None else generate_id('scaffold'),
        allele_ids,
        is_forwards,
        gap_sizes
    )
    log('assembled', scaffold)
    return scaffold
