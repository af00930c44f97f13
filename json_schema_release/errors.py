"""
Errors reported to the release lifecycle host.

Every fatal pipeline failure is raised as a SemanticReleaseError so the host
can tell it apart from an unexpected crash. The ERRORS registry holds the
message/code/details of each recognized failure.
"""

from __future__ import annotations

from collections.abc import Callable


class SemanticReleaseError(Exception):
    """A recognized release-pipeline error.

    Attributes:
        message: Short human readable summary
        code: Stable error code (e.g. "ENOTVERIFIED")
        details: Longer explanation, usually naming the offending input
        semantic_release: Always True; marks the error as recognized by the host
    """

    def __init__(self, message: str, code: str, details: str = ""):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.semantic_release = True

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, str]:
        """Return the error shape handed to the host."""
        return {"message": self.message, "code": self.code, "details": self.details}


def _error(code: str, message: str, *details: str) -> dict[str, str]:
    return {"code": code, "message": message, "details": "\n\n".join(details)}


ERRORS: dict[str, Callable[..., dict[str, str]]] = {
    "ESCHEMALOCATION": lambda: _error(
        "ESCHEMALOCATION",
        "You must provide a schema location",
        "the json schema release plugin requires a `schemaLocation` pointing at one or more schema files",
    ),
    "ENODOCUMENT": lambda paths: _error(
        "ENODOCUMENT",
        "Missing json schema document file.",
        "please check that your schemaLocation is properly set. missing: " + ", ".join(paths),
    ),
    "ENOTVERIFIED": lambda: _error(
        "ENOTVERIFIED",
        "Not verified",
        "Something went wrong and the schemas were not able to be verified.",
    ),
    "ENOVERSION": lambda: _error(
        "ENOVERSION",
        "No nextRelease version",
        "Something went wrong and there is no next release version",
    ),
    "ENOTITLE": lambda path: _error(
        "ENOTITLE",
        "The schema must have a title",
        f"Schema requires a title: {path}",
    ),
    "ESCHEMAREAD": lambda failures: _error(
        "ESCHEMAREAD",
        "Unable to read schema",
        *failures,
    ),
    "ESCHEMAPARSE": lambda failures: _error(
        "ESCHEMAPARSE",
        "Unable to parse schema",
        *failures,
    ),
    "EDEREFERENCE": lambda cause: _error(
        "EDEREFERENCE",
        "Unable to dereference schema",
        cause,
    ),
    "ETRANSPILE": lambda language, cause: _error(
        "ETRANSPILE",
        f"Unable to generate {language} types",
        cause,
    ),
    "ETSCOMPILE": lambda cause: _error(
        "ETSCOMPILE",
        "TypeScript compilation failed",
        cause,
    ),
    "EWRITE": lambda path, cause: _error(
        "EWRITE",
        "Unable to write generated artifact",
        f"{path}: {cause}",
    ),
}


def release_error(code: str, *args: object) -> SemanticReleaseError:
    """Build the SemanticReleaseError registered under `code`.

    Args:
        code: Key of the ERRORS registry
        *args: Arguments for the registered factory

    Returns:
        The error, ready to be raised
    """
    definition = ERRORS[code](*args)
    return SemanticReleaseError(definition["message"], definition["code"], definition["details"])
