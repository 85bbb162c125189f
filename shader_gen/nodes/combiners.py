# Combiner Nodes
# Handles: additive sums, binary operators/calls, temporaries, custom text

from typing import Optional, Sequence

from ..ir.layout import ShaderLayout
from ..ir.types import ShaderVarType
from .base import ShaderNode, present


class ShaderAdditiveCombiner(ShaderNode):
    """Sum of every child that generates; failing children are left out."""

    def __init__(self, nodes: Optional[Sequence[ShaderNode]] = None):
        self.sub_nodes = list(nodes or [])

    def add_node(self, node: ShaderNode):
        self.sub_nodes.append(node)

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        terms = []
        for node in self.sub_nodes:
            out = node.generate(c, v)
            if out is not None:
                terms.append(out)
        if not terms:
            return c.unsatisfied(self, "no term generated")
        if len(terms) == 1:
            return terms[0]
        return "(" + " + ".join(terms) + ")"

    def children(self):
        return present(*self.sub_nodes)


class ShaderOp(ShaderNode):
    """
    Combine two children with an infix operator (`a * b`) or a call (`max(a, b)`).

    With needs_all=False a single surviving child is passed through unchanged.
    """

    def __init__(self, n1: ShaderNode, n2: ShaderNode, op: str, is_operator: bool, needs_all: bool = False):
        self.n1 = n1
        self.n2 = n2
        self.op = op
        self.is_operator = is_operator
        self.needs_all = needs_all

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        a = self.n1.generate(c, v)
        if a is None and self.needs_all:
            return c.unsatisfied(self, f"left operand of '{self.op}' failed")
        b = self.n2.generate(c, v)
        if b is None and self.needs_all:
            return c.unsatisfied(self, f"right operand of '{self.op}' failed")

        if a is None and b is None:
            return c.unsatisfied(self, f"both operands of '{self.op}' failed")
        if a is None:
            return b
        if b is None:
            return a
        if self.is_operator:
            return f"({a} {self.op} {b})"
        return f"{self.op}({a}, {b})"

    def children(self):
        return (self.n1, self.n2)

    def __repr__(self):
        return f"ShaderOp({self.op!r})"


class ShaderTempRef(ShaderNode):
    """Used to save stuff into a temp. Only valuable if reused > 1 time."""

    def __init__(self, type: ShaderVarType, name: str, body: ShaderNode):
        self.type = type
        self.name = name
        self.body = body

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        out = self.body.generate(c, v)
        if out is None:
            return c.unsatisfied(self, f"body of temporary '{self.name}' failed")
        return c.add_temp_val(self.type, self.name, out)

    def children(self):
        return (self.body,)

    def __repr__(self):
        return f"ShaderTempRef({self.name!r})"


class ShaderCustom(ShaderNode):
    """
    Literal text around an optional inner node: `before + inner + after`.

    With use_inner=False the inner node only gates generation and its text
    is not emitted.
    """

    def __init__(self, before: str, after: str = "", inner: Optional[ShaderNode] = None,
                 use_inner: bool = True, type: ShaderVarType = ShaderVarType.FLOAT4):
        self.before = before
        self.after = after
        self.inner = inner
        self.use_inner = use_inner
        self.type = type

    @classmethod
    def constant(cls, type: ShaderVarType, text: str) -> 'ShaderCustom':
        return cls(text, "", None, False, type)

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        if self.inner is None:
            return self.before + self.after
        out = self.inner.generate(c, v)
        if out is None:
            return c.unsatisfied(self, "inner node failed")
        if not self.use_inner:
            return self.before + self.after
        return self.before + out + self.after

    def children(self):
        return present(self.inner)
