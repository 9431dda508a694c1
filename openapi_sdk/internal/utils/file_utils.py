"""Запись сгенерированных файлов"""

import logging
import os
import stat
import tempfile

logger = logging.getLogger(__name__)


def _target_mode(target: str) -> int:
    """Права существующего файла или права нового файла по umask"""
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: str, content: str) -> str:
    """
    Атомарная запись файла целиком.

    Содержимое пишется во временный файл рядом с целевым и переносится
    через os.replace только после успешной записи. При ошибке временный
    файл удаляется, существующий файл остается нетронутым.

    Returns:
        Абсолютный путь записанного файла
    """
    target = os.path.abspath(path)
    directory = os.path.dirname(target)
    os.makedirs(directory, exist_ok=True)

    fd, staging = tempfile.mkstemp(
        prefix=f".{os.path.basename(target)}.", suffix=".tmp", dir=directory
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        # mkstemp создает файл с правами 0600
        os.chmod(staging, _target_mode(target))
        os.replace(staging, target)
    except BaseException:
        if os.path.exists(staging):
            os.remove(staging)
        raise

    logger.debug("Файл %s записан (%d символов)", target, len(content))
    return target
