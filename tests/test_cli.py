import json
import unittest

from typer.testing import CliRunner

from chembalance.cli import app


class TestCli(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()

    def test_balance(self):
        result = self.runner.invoke(app, ["balance", "[H*2]+[O*2]⇒[H*2 O]"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output, "2H₂ + O₂ ⇒ 2H₂O\n")

    def test_balance_json(self):
        result = self.runner.invoke(app, ["balance", "--json", "[H*2]+[O*2]⇒[H*2 O]"])
        self.assertEqual(result.exit_code, 0)
        payload = json.loads(result.output)
        self.assertEqual(payload["coefficients"], [2, 1, 2])
        self.assertEqual(payload["reactants"], [2, 1])
        self.assertTrue(all(value == 0 for value in payload["residuals"].values()))

    def test_balance_raw(self):
        result = self.runner.invoke(app, ["balance", "--raw", "[H*2]+[O*2]⇒[H*2 O]"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("0.5O₂", result.output)

    def test_balance_error(self):
        result = self.runner.invoke(app, ["balance", "[H*2]⇒[O*2]"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Elements on both sides must be the same", result.output)

    def test_render(self):
        result = self.runner.invoke(app, ["render", "[H*2]+[O*2]⇒[H*2 O]"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output, "H₂ + O₂ ⇒ H₂O\n")


if __name__ == '__main__':
    unittest.main()
