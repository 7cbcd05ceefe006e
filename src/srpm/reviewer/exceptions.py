class ReviewToolError(Exception):
    pass


class MetadataError(ReviewToolError):
    pass


class IdentityParseError(MetadataError):
    def __init__(self, archive_name: str) -> None:
        self.archive_name = archive_name
        super().__init__(
            f"Cannot parse name-version-release from '{archive_name}'."
        )


class AmbiguousSpecError(MetadataError):
    def __init__(self, expected: str, candidates: list[str]) -> None:
        self.expected = expected
        self.candidates = candidates
        if candidates:
            detail = f"found {len(candidates)} copies"
        else:
            detail = "none found"
        super().__init__(f"Expected exactly one '{expected}' in the package, {detail}.")


class VerificationError(ReviewToolError):
    pass


class SpecMismatchError(VerificationError):
    def __init__(self, extracted_digest: str, reference_digest: str) -> None:
        self.extracted_digest = extracted_digest
        self.reference_digest = reference_digest
        super().__init__(
            "Spec files don't match!\n"
            f"  Spec file sum: {reference_digest}\n"
            f"  SRPM spec file sum: {extracted_digest}"
        )


class BuildError(ReviewToolError):
    pass


class BuildInvocationError(BuildError):
    def __init__(self, target_label: str, returncode: int) -> None:
        self.target_label = target_label
        self.returncode = returncode
        super().__init__(
            f"Build ({target_label}) exited with status {returncode}."
        )


class ToolNotFoundError(BuildError):
    pass


class ConfigError(ReviewToolError):
    pass


class ChecklistError(ReviewToolError):
    pass


class TemplateNotFoundError(ChecklistError):
    pass


class PromptValidationError(ReviewToolError):
    def __init__(self, response: str) -> None:
        self.response = response
        super().__init__(f"Sorry, response '{response}' not understood.")
