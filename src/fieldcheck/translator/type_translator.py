"""
Type translator from field variable kinds to Z3 SMT types.
"""
from fractions import Fraction
from typing import Any, Dict, Mapping, Union

import z3

from .value_parser import TypedValue, VariableKind


class TypeTranslator:
    """Translates field variable kinds to Z3 variables and values.

    Mapping:
        bool   -> Bool
        int    -> Int
        real   -> Real
        string -> Bool (true when the field has a value)
        date   -> Int (days since 1970-01-01)
    """

    def declare(self, name: str, kind: Union[VariableKind, str]) -> Any:
        """Declare a Z3 variable for a field.

        Args:
            name: Variable name (the field id)
            kind: Variable kind

        Returns:
            Z3 variable of the matching sort
        """
        kind = VariableKind(kind)
        if kind in (VariableKind.BOOL, VariableKind.STRING):
            return self.translate_bool_type(name)
        if kind in (VariableKind.INT, VariableKind.DATE):
            return self.translate_int_type(name)
        return self.translate_real_type(name)

    def declare_all(self, variables: Mapping[str, Union[VariableKind, str]]) -> Dict[str, Any]:
        """Declare one Z3 variable per entry of a variable map."""
        return {name: self.declare(name, kind) for name, kind in variables.items()}

    def translate_bool_type(self, name: str) -> Any:
        return z3.Bool(name)

    def translate_int_type(self, name: str) -> Any:
        return z3.Int(name)

    def translate_real_type(self, name: str) -> Any:
        return z3.Real(name)

    def to_value(self, value: TypedValue, kind: Union[VariableKind, str]) -> Any:
        """Convert a parsed value into a Z3 literal of the kind's sort.

        Reals are passed as exact rationals of their decimal text, so 0.15
        becomes 3/20 rather than the nearest binary fraction.
        """
        kind = VariableKind(kind)
        if kind in (VariableKind.BOOL, VariableKind.STRING):
            return z3.BoolVal(bool(value))
        if kind in (VariableKind.INT, VariableKind.DATE):
            return z3.IntVal(int(value))
        return z3.RealVal(Fraction(repr(float(value))))

    def bind_value(self, var: Any, value: TypedValue, kind: Union[VariableKind, str]) -> Any:
        """Create the assertion ``var == value``.

        Args:
            var: Z3 variable declared for the field
            value: Parsed concrete value
            kind: Variable kind the value was parsed as

        Returns:
            Z3 boolean expression
        """
        return var == self.to_value(value, kind)
