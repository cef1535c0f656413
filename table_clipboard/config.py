# -*- coding: utf-8 -*-
"""테이블 클립보드 코덱 설정

HTML <table> ↔ 그리드 변환에 쓰이는 상수, 정규표현식, 환경변수 설정.
"""
import os
import re
from pathlib import Path

from dotenv import load_dotenv

# ─── 경로 / 환경변수 ──────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# .env 파일 로드 (프로젝트 루트에서 찾음, 기존 환경변수 우선)
load_dotenv(BASE_DIR / ".env")

# BeautifulSoup 트리 빌더 ("lxml" | "html.parser" | "html5lib")
HTML_PARSER = os.getenv("TABLE_CLIPBOARD_PARSER", "lxml")

# ─── 로깅 설정 ───────────────────────────────────────────────
LOG_LEVEL = os.getenv("TABLE_CLIPBOARD_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%H:%M:%S"

# ─── 이스케이프 사전 ──────────────────────────────────────────
# 가져오기(import) 시 되돌리는 4개 엔티티. &nbsp;는 일반 공백으로 복원된다.
ESCAPED_HTML_CHARS = {
    "&nbsp;": "\x20",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
}

# ─── 스프레드시트(Excel) 방언 ─────────────────────────────────
# 2칸 이상 연속 공백을 Excel이 직렬화하는 방식
MSO_SPACERUN_OPEN = '<span style="mso-spacerun: yes">'
MSO_SPACERUN_CLOSE = "</span>"
# 시각적 병합만 원하는 셀 (mergeCells에 기록하지 않음)
MSO_IGNORE_COLSPAN = "mso-ignore:colspan"
# <meta name="Generator" content="Microsoft Excel 15">
GENERATOR_META_SELECTOR = 'meta[name$="enerator"]'

# 브라우저 DOM이 허용하는 span 상한
MAX_COLSPAN = 1000
MAX_ROWSPAN = 65534

# ─── 정규표현식 패턴 ──────────────────────────────────────────
PATTERNS = {
    # 내보내기(export) 인코딩
    # 꺾쇠를 먼저 이스케이프하므로 입력에 남은 <br> 태그는 없다
    "line_break": re.compile(r'\r\n|\n|\r'),
    "space_run": re.compile(r'\x20{2,}'),
    "tab": re.compile(r'\t'),

    # 원시 HTML 전처리: <td> 내부의 <br> 외 태그 제거
    "td_fragment": re.compile(r'<td\b[^>]*?>([\s\S]*?)</\s*td>', re.IGNORECASE),
    "td_opening": re.compile(r'<td\b[^>]*?>', re.IGNORECASE),
    "inner_tag_except_br": re.compile(r'(<(?!br)([^>]+)>)', re.IGNORECASE),
    # HTML 입력 스트림 개행 정규화 (CRLF/CR → LF)
    "input_newline": re.compile(r'\r\n?'),

    # 셀 값 정규화: 일반 경로
    "br_tag": re.compile(r'<br(\s*|/)>[\r\n]?', re.IGNORECASE | re.MULTILINE),
    # 셀 값 정규화: Excel 경로
    "excel_newline_run": re.compile(r'[\r\n][\x20]{0,2}'),
    "excel_br_tag": re.compile(r'<br(\s*|/)>[\r\n]?[\x20]{0,3}', re.IGNORECASE | re.MULTILINE),
    "excel_generator": re.compile(r'excel', re.IGNORECASE),

    # 엔티티 복원
    "escaped_chars": re.compile(
        "|".join(f"({re.escape(key)})" for key in ESCAPED_HTML_CHARS),
        re.IGNORECASE,
    ),
}
