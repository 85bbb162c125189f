import logging
from dataclasses import dataclass
from typing import List, Optional, Set

from ..config import DEFAULT_CONFIG, GeneratorConfig
from ..defs import ShaderDef
from ..errors import DefinitionError, StageGenerationError
from ..ir.layout import ShaderLayout, ShaderMaterial, VarInfo, VarStorage
from .shader_context import ShaderContext

logger = logging.getLogger(__name__)


@dataclass
class ShaderPair:
    """
    Generated vertex/fragment program sources plus the variables each stage
    actually consumed, so the binding layer can skip everything else.
    """
    vertex_source: str
    fragment_source: str
    vertex_inputs: ShaderLayout
    fragment_inputs: ShaderLayout
    varyings: ShaderLayout

    @property
    def attributes(self) -> ShaderLayout:
        return self.vertex_inputs.filtered(VarStorage.ATTRIBUTE)

    @property
    def uniforms(self) -> ShaderLayout:
        """Uniforms used by either stage."""
        return self.vertex_inputs.filtered(VarStorage.UNIFORM).merged(
            self.fragment_inputs.filtered(VarStorage.UNIFORM))


@dataclass
class StageResult:
    source: str
    used: ShaderLayout
    outputs: ShaderLayout


class ShaderGenerator:
    """
    Generates GLSL vertex/fragment source pairs from two ShaderDefs.

    The generator holds no per-material state: every call to generate()
    works on fresh ShaderContexts, so one instance can serve many materials
    (and threads) concurrently.
    """
    def __init__(self, vs: ShaderDef, ps: ShaderDef, config: Optional[GeneratorConfig] = None):
        self.vs = vs
        self.ps = ps
        self.config = config or DEFAULT_CONFIG

        if self.config.position_output not in vs:
            raise DefinitionError(f"Vertex definition has no '{self.config.position_output}' output",
                                  output=self.config.position_output)
        if self.config.color_output not in ps:
            raise DefinitionError(f"Fragment definition has no '{self.config.color_output}' output",
                                  output=self.config.color_output)
        for name in ps:
            if name not in self.config.builtin_outputs:
                raise DefinitionError(f"Fragment output '{name}' is not a builtin output", output=name)

    def generate(self, material: ShaderMaterial) -> ShaderPair:
        """
        Generate both stages for `material`.

        Raises:
            StageGenerationError: If a builtin output of either stage cannot be
                generated with the material's inputs.
        """
        logger.info(f"Generating shaders for material '{material.name}'")

        # 1. Vertex pass: which varyings can be produced at all
        probe = self._generate_stage(material, self.vs, material.inputs, vertex_stage=True)

        # 2. Fragment pass over uniforms + produced varyings
        frag_inputs = self._fragment_inputs(material, probe.outputs)
        frag = self._generate_stage(material, self.ps, frag_inputs, vertex_stage=False)
        used_varyings = set(frag.used.filtered(VarStorage.VARYING))

        # 3. Vertex pass again without the varyings nobody reads
        vert = probe
        if used_varyings != set(probe.outputs):
            skipped = sorted(set(probe.outputs) - used_varyings)
            logger.debug(f"Skipping unused varyings: {', '.join(skipped)}")
            vert = self._generate_stage(material, self.vs, material.inputs, vertex_stage=True,
                                        keep=used_varyings)

        return ShaderPair(
            vertex_source=vert.source,
            fragment_source=frag.source,
            vertex_inputs=vert.used,
            fragment_inputs=frag.used,
            varyings=vert.outputs,
        )

    def _fragment_inputs(self, material: ShaderMaterial, varyings: ShaderLayout) -> ShaderLayout:
        uniforms = material.uniforms
        for name in varyings:
            if name in uniforms:
                logger.warning(f"Varying '{name}' hides material uniform of the same name")
        return uniforms.merged(varyings)

    def _generate_stage(self, material: ShaderMaterial, shader: ShaderDef, inputs: ShaderLayout,
                        vertex_stage: bool, keep: Optional[Set[str]] = None) -> StageResult:
        c = ShaderContext(material, vertex_stage)
        outputs = ShaderLayout()
        assignments = []

        for name, node in shader.items():
            builtin = name in self.config.builtin_outputs
            if not builtin and keep is not None and name not in keep:
                continue

            expr = node.generate(c, inputs)
            if expr is None:
                if builtin:
                    raise StageGenerationError(
                        f"Cannot generate {c.stage} shader for material '{material.name}': "
                        f"'{name}' is unsatisfiable",
                        stage=c.stage, output=name, diagnostics=c.diagnostics)
                logger.debug(f"[{c.stage}] output '{name}' not generated")
                continue

            assignments.append(f"{self.config.indent}{name} = {expr};")
            if not builtin:
                outputs.add(name, VarInfo(node.get_type(), VarStorage.VARYING))

        sections = [
            self._generate_header(vertex_stage),
            self._generate_declarations(c.used, outputs, vertex_stage),
            "\n\n".join(c.ordered_temp_funcs()),
            self._generate_main(c, assignments),
        ]
        source = "\n\n".join(s for s in sections if s) + "\n"
        return StageResult(source, c.used, outputs)

    def _generate_header(self, vertex_stage: bool) -> str:
        lines = []
        if self.config.glsl_version:
            lines.append(f"#version {self.config.glsl_version}")
        if not vertex_stage and self.config.fragment_precision:
            lines.append(f"precision {self.config.fragment_precision} float;")
        return "\n".join(lines)

    def _generate_declarations(self, used: ShaderLayout, outputs: ShaderLayout, vertex_stage: bool) -> str:
        # Sort within each group for deterministic output
        lines = []
        for storage in (VarStorage.ATTRIBUTE, VarStorage.UNIFORM, VarStorage.VARYING):
            group = used.filtered(storage)
            if storage == VarStorage.VARYING and vertex_stage:
                group = outputs
            for name in sorted(group):
                lines.append(group.find(name).declaration(name))
        return "\n".join(lines)

    def _generate_main(self, c: ShaderContext, assignments: List[str]) -> str:
        lines = ["void main() {"]
        lines.extend(c.ordered_temp_vals(self.config.indent))
        lines.extend(assignments)
        lines.append("}")
        return "\n".join(lines)
