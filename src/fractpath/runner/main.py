"""
main.py - Entry point for parallel rendering of midpoint displaced paths.
"""

import os
import json
import time
import logging
from pathlib import Path
from dataclasses import asdict, replace
import multiprocessing as mp
from multiprocessing import Pool
from typing import Optional, Union

from ..logging_utils import configure_logging
from .config import RenderConfig
from .orchestration import worker_init, render_job


def main(batch_size: int = 16,
         output_dir: Union[Path, str, None] = None,
         config: Optional[RenderConfig] = None,
         processes: Optional[int] = None,
         log_dir: Union[Path, str] = "logs") -> Path:
    """Render ``batch_size`` displaced polygons and write a batch metadata file.

    Returns:
        Path of the batch JSON file.
    """
    config = config or RenderConfig()
    if output_dir is not None:
        config = replace(config, output_dir=Path(output_dir))
    log_dir = Path(log_dir).resolve()
    main_process = mp.current_process()

    log_path = configure_logging(
        level=config.logger_level,
        log_dir=log_dir,
        name="fractpath",
        run_prefix=f"main_{main_process.pid}",
    )
    logger = logging.getLogger("fractpath.main")

    logger.info(f"Starting parallel rendering in {main_process.name} PID={os.getpid()}")
    logger.info(f"RenderConfig: {asdict(config)}")

    total_cores = os.cpu_count() or 1
    num_cores = processes or max(1, min(batch_size, int(total_cores * 0.75)))
    logger.info(f"Using {num_cores} workers for {batch_size} images...")
    logger.info(f"Logs written to: {log_path}")

    jobs = [(i, config.output_dir / f"displaced_{i:06d}.png") for i in range(batch_size)]
    results_meta = {}
    failures = []

    with Pool(processes=num_cores, initializer=worker_init, initargs=(config, log_dir)) as pool:
        for path, meta, err in pool.imap(render_job, jobs, chunksize=4):
            if err is not None:
                failures.append(err)
                continue
            results_meta[str(path)] = json.loads(meta)

    if failures:
        logger.error(f"{len(failures)} of {batch_size} jobs failed; first error: {failures[0]}")

    ts = time.strftime("%Y%m%d_%H%M%S")
    batch_file = config.output_dir / f"batch_{ts}.json"
    with open(batch_file, "w", encoding="utf-8") as f:
        json.dump(results_meta, f, indent=2, ensure_ascii=False)

    logger.info(f"Batch metadata written: {batch_file}")
    return batch_file


if __name__ == "__main__":
    main()
