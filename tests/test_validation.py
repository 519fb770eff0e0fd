import unittest

from chembalance.errors import (
    DuplicateYield,
    ElementMismatch,
    EquationError,
    MissingYield,
    TooManyPinnedCoefficients,
)
from chembalance.models import AbstractCompound, Element, FreeCharge, Sum, Yield
from chembalance.scanner import scan
from chembalance.simplify import simplify, simplify_side
from chembalance.validation import ensure_single_yield, validate


class TestSimplify(unittest.TestCase):
    def test_element(self):
        compound = simplify(Element("Na", count=2, charge=-1))
        self.assertEqual(compound, AbstractCompound(atoms={"Na": 2}, charge=-1))

    def test_nested_multipliers(self):
        (formula,) = scan("[2*Al [S O*3]*3]")
        compound = simplify(formula)
        self.assertEqual(compound.atoms, {"Al": 2, "S": 3, "O": 9})
        self.assertIsNone(compound.pinned)

    def test_top_level_count_is_pinned_not_applied(self):
        (formula,) = scan("2*[H*2]")
        compound = simplify(formula)
        self.assertEqual(compound.atoms, {"H": 2})
        self.assertEqual(compound.pinned, 2)

    def test_nested_count_is_applied_not_pinned(self):
        (formula,) = scan("2*[H*2]")
        compound = simplify(formula, nested=True)
        self.assertEqual(compound.atoms, {"H": 4})
        self.assertIsNone(compound.pinned)

    def test_repeated_elements_are_summed(self):
        (formula,) = scan("[C H*3 C O O H]")
        self.assertEqual(simplify(formula).atoms, {"C": 2, "H": 4, "O": 2})

    def test_member_charges_are_ignored(self):
        (formula,) = scan("[Fe^+3 O]^+1")
        self.assertEqual(simplify(formula).charge, 1)

    def test_free_charge(self):
        self.assertEqual(simplify(FreeCharge(-1)), AbstractCompound(charge=-1))

    def test_separators(self):
        self.assertIsNone(simplify(Sum()))
        self.assertIsNone(simplify(Yield()))
        self.assertEqual(len(simplify_side(scan("[H]+[O]-1"))), 3)


class TestValidation(unittest.TestCase):
    def test_missing_yield(self):
        with self.assertRaises(MissingYield):
            validate(scan("[H*2]+[O*2]"))

    def test_duplicate_yield(self):
        with self.assertRaises(DuplicateYield):
            validate(scan("[H*2]⇒[H*2 O]⇒[H*2]"))

    def test_element_mismatch(self):
        with self.assertRaises(ElementMismatch) as ctx:
            validate(scan("[H*2]⇒[O*2]"))
        self.assertEqual(ctx.exception.left_only, {"H"})
        self.assertEqual(ctx.exception.right_only, {"O"})
        self.assertEqual(str(ctx.exception), "Elements on both sides must be the same")

    def test_counts_are_not_compared(self):
        reactants, products = validate(scan("[H*2]⇒[H]"))
        self.assertEqual(len(reactants), 1)
        self.assertEqual(len(products), 1)

    def test_too_many_pinned(self):
        with self.assertRaises(TooManyPinnedCoefficients):
            validate(scan("1*[H*2]+1*[O*2]⇒[H*2 O]"))

    def test_single_pin_is_accepted(self):
        reactants, _ = validate(scan("[H*2]+1*[O*2]⇒[H*2 O]"))
        self.assertEqual([c.pinned for c in reactants], [None, 1])

    def test_yield_position(self):
        self.assertEqual(ensure_single_yield(scan("[H]+[H]⇒[H*2]")), 3)

    def test_errors_share_a_base(self):
        for error in (MissingYield, DuplicateYield, ElementMismatch, TooManyPinnedCoefficients):
            self.assertTrue(issubclass(error, EquationError))
            self.assertTrue(issubclass(error, ValueError))


if __name__ == '__main__':
    unittest.main()
