"""CLI demo that walks ``Tag.jobs`` and ``Job.company`` on the live API.

Run with the virtual environment activated::

    python examples/demo_tag_jobs.py python

Optionally set ``GETONBRD_BASE_URL`` if the API is not served from the
default ``https://www.getonbrd.com/api/v0``.
"""

import logging
import os
import sys
from pprint import pprint

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from getonbrd import Getonbrd

logging.basicConfig(level=logging.INFO)


def main() -> None:
    tag = sys.argv[1] if len(sys.argv) > 1 else "python"
    client = Getonbrd()

    jobs = client.tags.jobs(tag)
    if jobs is None:
        return

    listed = jobs.all()
    print(f"Tag {tag!r} has {len(listed)} jobs on the first page")

    for job in listed[:5]:
        company = client.jobs.company(job)
        print(f"\n{job.id}:")
        pprint({
            "title": job.get("title"),
            "company": company.get("name") if company else None,
            "remote": job.get("remote"),
        })


if __name__ == "__main__":
    main()
