"""
Scheduler for automated register scraping.

Runs the scraper once a day at the configured time.
"""

import schedule
import time
import subprocess
import logging
import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from yorkescraper.config import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("Scheduler")


def run_process_and_stream_output(command, env, label="run_scraper"):
    """Run ``command`` and relay each line of its combined output to the log as it arrives."""
    with subprocess.Popen(
        command,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        bufsize=1,
        cwd=PROJECT_ROOT
    ) as process:
        for line in process.stdout:
            line = line.rstrip()
            if line:
                logger.info(f"[{label}] {line}")
        return process.wait()


def run_workflow():
    """Run one scrape of the development register in a child process."""
    logger.info("Starting scheduled scrape...")
    try:
        scraper_path = PROJECT_ROOT / "scripts" / "run_scraper.py"
        return_code = run_process_and_stream_output(
            [sys.executable, str(scraper_path)],
            env=os.environ.copy()
        )

        if return_code == 0:
            logger.info("Scraper finished successfully.")
        else:
            logger.error(f"Scraper failed with return code {return_code}.")
        return return_code

    except OSError as e:
        logger.error(f"Error running scraper: {e}", exc_info=True)
        return 1


def main():
    """Main scheduler entry point."""
    logger.info(f"Scheduler started. Scrape scheduled for {settings.schedule_time} daily...")

    schedule.every().day.at(settings.schedule_time).do(run_workflow)

    # Also run immediately on startup if requested (useful for testing)
    if os.getenv("RUN_ON_STARTUP", "false").lower() == "true":
        logger.info("Running on startup...")
        run_workflow()

    while True:
        schedule.run_pending()
        time.sleep(60)


if __name__ == "__main__":
    main()
