import unittest

from chembalance.models import Element, Formula, FreeCharge, Sum, Yield
from chembalance.render import (
    format_number,
    render,
    render_element,
    render_formula,
    render_free_charge,
    to_subscript,
    to_superscript,
)


class TestScripts(unittest.TestCase):
    def test_subscript(self):
        self.assertEqual(to_subscript(123), "₁₂₃")
        self.assertEqual(to_subscript(1.5), "₁.₅")

    def test_superscript_carries_sign(self):
        self.assertEqual(to_superscript(2), "⁺²")
        self.assertEqual(to_superscript(-5), "⁻⁵")
        self.assertEqual(to_superscript(0.5), "⁺⁰·⁵")

    def test_format_number(self):
        self.assertEqual(format_number(2.0), "2")
        self.assertEqual(format_number(0.25), "0.25")


class TestRender(unittest.TestCase):
    def test_element(self):
        self.assertEqual(render_element(Element("O", count=2, charge=-1)), "O₂⁻¹")
        self.assertEqual(render_element(Element("Na", coefficient=3)), "3Na")
        self.assertEqual(render_element(Element("Na", coefficient=3), top_level=False), "Na")

    def test_nested_formula_uses_parentheses(self):
        formula = Formula(
            body=(
                Element("Al"),
                Formula(body=(Element("O"), Element("H")), count=3),
            ),
            count=2,
        )
        self.assertEqual(render_formula(formula), "2Al(OH)₃")

    def test_nested_count_of_one_is_omitted(self):
        formula = Formula(body=(Formula(body=(Element("O"), Element("H"))),))
        self.assertEqual(render_formula(formula), "(OH)")

    def test_formula_charge(self):
        formula = Formula(body=(Element("Mn"), Element("O", 4)), charge=-1)
        self.assertEqual(render_formula(formula), "MnO₄⁻¹")

    def test_free_charge(self):
        self.assertEqual(render_free_charge(FreeCharge(-3)), "+e⁻³")
        self.assertEqual(render_free_charge(FreeCharge(0)), "")

    def test_equation(self):
        ast = (
            Formula(body=(Element("H", 2),), count=2),
            Sum(),
            Formula(body=(Element("O", 2),)),
            Yield(),
            Formula(body=(Element("H", 2), Element("O")), count=2),
        )
        self.assertEqual(render(ast), "2H₂ + O₂ ⇒ 2H₂O ")


if __name__ == '__main__':
    unittest.main()
