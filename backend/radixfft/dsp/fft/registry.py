"""Spectrum backend registry with auto-selection.

Priority order (auto mode):
1. mixedradix - radixfft's own engine, when fft_size is admissible
2. scipy - fallback for any size (always available)
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .base import FFTBackend

logger = logging.getLogger(__name__)

# Backend registry
_BACKENDS: dict[str, type[FFTBackend]] = {}

AUTO_PRIORITY: tuple[str, ...] = ("mixedradix", "scipy")


def register(name: str) -> Callable[[type[FFTBackend]], type[FFTBackend]]:
    """Decorator to register a spectrum backend.

    Args:
        name: Backend identifier (e.g., 'mixedradix', 'scipy')
    """

    def decorator(cls: type[FFTBackend]) -> type[FFTBackend]:
        _BACKENDS[name] = cls
        return cls

    return decorator


def _try_create_backend(name: str, fft_size: int, **kwargs: Any) -> FFTBackend | None:
    """Try to create a backend, returning None if unavailable."""
    if name not in _BACKENDS:
        return None

    try:
        return _BACKENDS[name](fft_size=fft_size, **kwargs)
    except ImportError as e:
        logger.debug(f"Backend '{name}' not available: {e}")
        return None
    except (TypeError, ValueError) as e:
        logger.warning(f"Failed to initialize backend '{name}': {e}")
        return None


def get_backend(
    accelerator: str = "auto",
    fft_size: int = 2048,
    **kwargs: Any,
) -> FFTBackend:
    """Get a spectrum backend by name or auto-select.

    Args:
        accelerator: Backend name or 'auto'
            Options: 'auto', 'mixedradix', 'scipy'
        fft_size: Transform size in samples
        **kwargs: Additional backend-specific arguments (e.g. twiddle_mode)

    Returns:
        FFTBackend instance. Falls back to scipy when the requested backend
        cannot serve fft_size.
    """
    _ensure_registered()

    if accelerator == "auto":
        for name in AUTO_PRIORITY:
            backend = _try_create_backend(name, fft_size, **kwargs)
            if backend is not None:
                logger.info(f"Auto-selected FFT backend: {backend.name} (fft_size={fft_size})")
                return backend
    else:
        backend = _try_create_backend(accelerator, fft_size, **kwargs)
        if backend is not None:
            return backend
        logger.warning(
            f"Requested FFT backend '{accelerator}' not available for fft_size={fft_size}, "
            "falling back to scipy"
        )

    return _BACKENDS["scipy"](fft_size=fft_size)


def available_backends() -> list[str]:
    """Get list of registered backend names."""
    _ensure_registered()
    return list(_BACKENDS)


def _ensure_registered() -> None:
    """Ensure all backends are registered."""
    if "scipy" in _BACKENDS and "mixedradix" in _BACKENDS:
        return

    # Importing the modules runs their @register decorators
    from . import mixedradix_backend, scipy_backend  # noqa: F401

    logger.debug(f"Registered FFT backends: {list(_BACKENDS.keys())}")
