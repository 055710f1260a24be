"""Exception hierarchy for CA creation.

Every stage of the pipeline raises one of these; the CLI maps any of them
to exit status 1.
"""


class CAError(Exception):
    """Base class for CA creation failures."""


class InvalidInputError(CAError):
    """Caller-supplied configuration is unusable (e.g. missing output path)."""


class MissingCommonNameError(InvalidInputError):
    """Subject attributes have no common name."""


class KeyGenerationError(CAError):
    """RSA key pair could not be generated."""


class DigestError(CAError):
    """dnQualifier could not be derived from the public key."""


class IssuanceError(CAError):
    """Certificate could not be built or signed."""


class ValidationError(CAError):
    """Issued certificate could not be re-parsed or verified."""


class ArtifactWriteError(CAError):
    """Key or certificate file could not be written."""
