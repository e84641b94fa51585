"""
Discovery of block-numbered force files in a data directory.
"""
import re
from pathlib import Path
import logging
from typing import List, Union

logger = logging.getLogger(__name__)

DEFAULT_TAIL = '.fout.dat'
BLOCK_PATTERN = re.compile(r'block\.(\d+)\.')


def find_block_files(directory: Union[str, Path], tail: str = DEFAULT_TAIL) -> List[Path]:
    """
    List the force files ``<head>block.<i><tail>`` of a directory in block order.

    The head is taken from the first matching file name and the number of
    blocks from the largest block index found; missing blocks are skipped.

    Args:
        directory: Directory to scan
        tail: File name suffix that follows the block index

    Returns:
        Existing block files for i = 1..max block index
    """
    data_dir = Path(directory)
    if not data_dir.is_dir():
        raise FileNotFoundError(f"Data directory not found: {directory}")

    names = sorted(p.name for p in data_dir.glob(f"*{tail}") if p.is_file())
    head, block_max = None, 0
    for name in names:
        m = BLOCK_PATTERN.search(name)
        if m is None:
            continue
        if head is None:
            head = name[:m.start()]
        block_max = max(block_max, int(m.group(1)))

    if head is None:
        logger.warning(f"No '*block.<n>{tail}' files in {data_dir}")
        return []
    logger.info(f"block {block_max}, head {data_dir / head}")

    files = []
    for i in range(1, block_max + 1):
        fn = data_dir / f"{head}block.{i}{tail}"
        if fn.is_file():
            files.append(fn)
        else:
            logger.debug(f"Block file {fn.name} is missing; skipped")
    return files
