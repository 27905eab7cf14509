"""
파일 인코딩 감지 및 텍스트 읽기

UTF-8로 먼저 디코딩을 시도하고, 실패하면 chardet으로 인코딩을 감지합니다.
CSV 파일이 EUC-KR, CP949, Latin-1 등으로 저장된 경우를 처리합니다.
"""

import logging
from pathlib import Path

import chardet

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


def detect_encoding(raw_data: bytes) -> str:
    """
    바이트 데이터의 인코딩 감지

    Returns:
        감지된 인코딩 (감지 실패 시 'utf-8')

    Examples:
        >>> detect_encoding("이름,나이".encode("euc-kr"))
        'EUC-KR'
    """
    result = chardet.detect(raw_data)
    encoding = result.get("encoding")

    if encoding is None:
        logger.warning("⚠️ 인코딩 감지 실패. UTF-8로 fallback.")
        return DEFAULT_ENCODING

    logger.debug(f"인코딩 감지: {encoding} (신뢰도: {result.get('confidence', 0.0):.2%})")
    return encoding


def read_text_file(file_path: Path, sample_size: int = 100_000) -> str:
    """
    텍스트 파일 읽기 (인코딩 자동 감지)

    Args:
        file_path: 파일 경로
        sample_size: 인코딩 감지에 사용할 샘플 크기 (바이트)

    Returns:
        디코딩된 텍스트 (UTF-8 BOM 제거)
    """
    raw_data = file_path.read_bytes()

    try:
        return raw_data.decode("utf-8-sig")
    except UnicodeDecodeError:
        encoding = detect_encoding(raw_data[:sample_size])
        logger.info(f"✅ UTF-8이 아닌 파일 감지: {file_path.name} ({encoding})")
        return raw_data.decode(encoding, errors="replace")
