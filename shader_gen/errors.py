"""
Custom exceptions for the shader generator.

Node-level "cannot generate with these inputs" is not an exception: nodes
return None and the caller decides whether that is fatal. The exceptions
below cover invalid definitions, fatal stage failures and bookkeeping
errors in the temporary tables.

Exception Hierarchy:
    ShaderGenError (base)
    ├── DefinitionError
    ├── GenerationError
    │   ├── StageGenerationError
    │   ├── DuplicateTemporaryError
    │   └── TemporaryCycleError
    └── MaterialError
"""

from typing import List, Optional


class ShaderGenError(Exception):
    """Base exception for all shader generator errors."""
    pass


class DefinitionError(ShaderGenError):
    """Raised when a ShaderDef or generator setup is invalid (e.g. cyclic node graph)."""

    def __init__(self, message: str, output: str = None):
        super().__init__(message)
        self.output = output


# =============================================================================
# Generation Errors
# =============================================================================

class GenerationError(ShaderGenError):
    """Base exception for errors raised while generating a stage."""
    pass


class StageGenerationError(GenerationError):
    """
    Raised when a required output of a stage cannot be generated.

    No partial source is ever returned for the material.

    Attributes:
        stage: 'vertex' or 'fragment'
        output: The output whose node failed (e.g. 'gl_FragColor')
        diagnostics: Failure reasons recorded while generating the stage
    """

    def __init__(self, message: str, stage: str = None, output: str = None,
                 diagnostics: Optional[List[str]] = None):
        super().__init__(message)
        self.stage = stage
        self.output = output
        self.diagnostics = list(diagnostics or [])

    def format_with_diagnostics(self) -> str:
        """Format error with the recorded node failures, most recent last."""
        if not self.diagnostics:
            return str(self)

        lines = [f"StageGenerationError: {self}", "--- NODE FAILURES ---"]
        for i, reason in enumerate(self.diagnostics):
            lines.append(f"{i+1:03d}: {reason}")
        lines.append("---------------------")
        return '\n'.join(lines)


class DuplicateTemporaryError(GenerationError):
    """Raised when a temporary name is registered twice with different contents."""

    def __init__(self, message: str, name: str = None):
        super().__init__(message)
        self.name = name


class TemporaryCycleError(GenerationError):
    """Raised when temporaries reference each other in a cycle."""

    def __init__(self, message: str, names: Optional[List[str]] = None):
        super().__init__(message)
        self.names = list(names or [])


# =============================================================================
# Material Errors
# =============================================================================

class MaterialError(ShaderGenError):
    """Raised when a material variable is declared with an invalid value."""

    def __init__(self, message: str, name: str = None):
        super().__init__(message)
        self.name = name
