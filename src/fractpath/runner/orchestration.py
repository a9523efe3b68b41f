"""
orchestration.py - Worker orchestration logic for the multiprocessing harness.
"""

import os
import sys
import logging
import traceback
from pathlib import Path
from typing import Optional, Tuple, Union

from ..logging_utils import configure_logging
from .config import RenderConfig
from .worker import PathWorker, LOGGER_NAME

PathLike = Union[str, Path]
RenderJob = Tuple[int, PathLike]

_worker: Optional[PathWorker] = None
_init_error: Optional[Exception] = None
_init_error_traceback: Optional[str] = None


def worker_init(config: RenderConfig, log_dir: PathLike = "logs") -> None:
    """Initializer for multiprocessing.Pool workers (per process).

    Errors are kept and re-raised by the first job, since exceptions raised
    in a Pool initializer are not reported to the parent.
    """
    global _worker, _init_error, _init_error_traceback
    try:
        pid = os.getpid()
        log_path = configure_logging(
            level=config.logger_level,
            log_dir=log_dir,
            name=LOGGER_NAME,
            run_prefix=f"worker_{pid}",
        )
        logger = logging.getLogger(LOGGER_NAME)
        logger.info(f"[worker_init] Starting worker PID={pid}")
        logger.debug(f"RenderConfig: {config!r}")
        _worker = PathWorker(config)
        logger.info(f"[worker_init] Worker PID={pid} initialized OK -> {log_path}")
    except Exception as e:
        _init_error = e
        _init_error_traceback = traceback.format_exc()
        # logging itself may be what failed
        print(f"[worker_init][PID={os.getpid()}] FATAL: {e}\n{_init_error_traceback}",
              file=sys.stderr, flush=True)


def render_job(job: RenderJob) -> Tuple[Optional[Path], Optional[str], Optional[Exception]]:
    """Render one image and return (path, meta_json, error).

    Job ``index`` is rendered with seed ``base_seed + index``, so every image
    can be reproduced on its own regardless of which process renders it.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if _init_error:
        logger.error(f"Worker-{os.getpid()} initialization error in worker_init().")
        logger.error(f"Error: {_init_error}. Traceback:\n{_init_error_traceback}")
        raise _init_error

    index, output_path = job
    try:
        _worker.plot_reset(_worker.config.base_seed + index)
        _worker.draw_polygon()
        out, meta = _worker.save_image(output_path)
        logger.debug(f"Rendered job {index} -> {out}")
        return out, meta, None
    except Exception as e:
        logger.error(f"Failed to process {output_path}: {e}")
        return None, None, e
