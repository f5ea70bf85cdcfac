# gpbo/config.py
import os
import logging

# Read version from VERSION file
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(os.path.abspath(_version_file), "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"

_SUPPORTED_BACKENDS = ("numpy",)

_VERBOSE_LEVELS = {0: logging.WARNING, 1: logging.INFO, 2: logging.DEBUG}


class _GPBOConfig:
    def __init__(self):
        self.version = __version__
        self.backend = None
        self.dtype = float
        self.seed = 1234
        self.log_filename = None
        # logger lives in config
        self.logger = logging.getLogger("gpbo")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(logging.INFO)

    def __str__(self):
        return (
            f"GPBOConfig("
            f"version={self.version}, "
            f"backend={self.backend}, "
            f"dtype={self.dtype}, "
            f"seed={self.seed}, "
            f"log_filename={self.log_filename})"
        )

    def __repr__(self):
        return (
            f"<GPBOConfig "
            f"version={self.version!r}, "
            f"backend={self.backend!r}, "
            f"dtype={self.dtype!r}, "
            f"seed={self.seed!r}, "
            f"log_filename={self.log_filename!r}>"
        )

    def update(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)
        return self


_config = _GPBOConfig()


def get_config():
    return _config


def _detect_backend():
    env = os.environ.get("GPBO_BACKEND")
    if env is None:
        return "numpy"
    if env not in _SUPPORTED_BACKENDS:
        raise RuntimeError(
            f"GPBO_BACKEND={env!r} is not available; supported: {_SUPPORTED_BACKENDS}"
        )
    return env


def init_backend():
    """Idempotent. Detect and store backend, set env for downstream imports."""
    if _config.backend is None:
        backend = _detect_backend()
        _config.backend = backend
        os.environ["GPBO_BACKEND"] = backend
    return _config.backend


def get_backend():
    """Return current backend; triggers detection if not set."""
    return _config.backend or init_backend()


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)


def configure_logging(verbose_level=1, log_filename=None):
    """Set the package log level from a BayesOpt-style verbose level.

    Levels 0, 1 and 2 log to stderr at WARNING, INFO and DEBUG.
    Levels 3, 4 and 5 use the same thresholds and also write to
    `log_filename`.
    """
    if verbose_level < 0:
        raise ValueError("verbose_level must be >= 0")
    level = _VERBOSE_LEVELS[min(verbose_level, 5) % 3]
    _config.logger.setLevel(level)

    if verbose_level >= 3 and log_filename is not None:
        path = os.path.abspath(log_filename)
        for h in _config.logger.handlers:
            if isinstance(h, logging.FileHandler) and h.baseFilename == path:
                break
        else:
            fh = logging.FileHandler(path)
            fh.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            _config.logger.addHandler(fh)
        _config.log_filename = path
    return level
