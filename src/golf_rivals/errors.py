class GolfRivalsError(Exception):
    """Base class for every fatal condition of a run."""


class ConfigurationError(GolfRivalsError):
    pass


class CutoffFormatError(ConfigurationError):
    def __init__(self, text: str, formats):
        self.text = text
        self.formats = list(formats)
        super().__init__(f"Unrecognized cutoff {text!r}")


class FetchError(GolfRivalsError):
    pass


class PayloadError(FetchError):
    pass


class RenderError(GolfRivalsError):
    pass
