"""HTML 이스케이프 코덱 - 셀 값 인코딩/디코딩, 줄바꿈·공백 정규화"""
import re

from bs4 import BeautifulSoup, Tag
from bs4.formatter import HTMLFormatter

from table_clipboard.config import (
    ESCAPED_HTML_CHARS, GENERATOR_META_SELECTOR, MAX_COLSPAN, MAX_ROWSPAN,
    MSO_SPACERUN_CLOSE, MSO_SPACERUN_OPEN, PATTERNS,
)


def _browser_entity_substitution(text: str) -> str:
    """브라우저 innerHTML 직렬화와 같은 규칙으로 텍스트 이스케이프"""
    return (
        text.replace("&", "&amp;")
        .replace("\xa0", "&nbsp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


# innerHTML 흉내: &nbsp;를 엔티티로 남기고 void 태그는 <br> 형태로 출력
INNER_HTML_FORMATTER = HTMLFormatter(
    entity_substitution=_browser_entity_substitution,
    void_element_close_prefix="",
)


def _spacerun(match: re.Match) -> str:
    """연속 공백 n개 → &nbsp; (n-1)개 + 공백 1개 (Excel 직렬화 방식)"""
    run_length = len(match.group())
    return f"{MSO_SPACERUN_OPEN}{'&nbsp;' * (run_length - 1)} {MSO_SPACERUN_CLOSE}"


def encode_html_entities(text) -> str:
    """셀 값을 클립보드용 HTML 텍스트로 인코딩.

    <, > 는 모든 위치에서 이스케이프한다. 줄바꿈(CR, LF, CRLF)은
    '<br>\\r\\n' 으로 통일하고, 2칸 이상 공백과 탭은 스프레드시트가 인식하는
    형태로 바꾼다.
    """
    text = f"{text}".replace("<", "&lt;").replace(">", "&gt;")
    text = PATTERNS["line_break"].sub("<br>\r\n", text)
    text = PATTERNS["space_run"].sub(_spacerun, text)
    return PATTERNS["tab"].sub("&#9;", text)


def encode_cell_value(value) -> str:
    """빈 값(None, '')은 빈 셀로, 나머지는 인코딩"""
    if value is None or value == "":
        return ""
    return encode_html_entities(value)


def decode_html_entities(text: str) -> str:
    """&nbsp; &amp; &lt; &gt; 를 원래 문자로 복원 (대소문자 무시)"""
    return PATTERNS["escaped_chars"].sub(
        lambda m: ESCAPED_HTML_CHARS[m.group().lower()], text
    )


def normalize_input_newlines(html: str) -> str:
    """HTML 입력 스트림 규칙대로 CRLF/CR → LF"""
    return PATTERNS["input_newline"].sub("\n", html)


def strip_cell_markup(html: str) -> str:
    """원시 HTML 문자열의 <td> 내부에서 <br> 이외의 태그를 제거.

    <td style="..."><span>a</span><br><b>b</b></td> → <td style="...">a<br>b</td>
    """
    def _clean(match: re.Match) -> str:
        cell_fragment = match.group()
        opening_tag = PATTERNS["td_opening"].match(cell_fragment).group()
        cell_value = cell_fragment[len(opening_tag):cell_fragment.rfind("<")]
        cell_value = PATTERNS["inner_tag_except_br"].sub("", cell_value)
        return f"{opening_tag}{cell_value}</td>"

    return PATTERNS["td_fragment"].sub(_clean, html)


def normalize_cell_html(inner_html: str) -> str:
    """일반 경로: <br> (+ 개행 1자) → CRLF"""
    return PATTERNS["br_tag"].sub("\r\n", inner_html)


def normalize_excel_cell_html(inner_html: str) -> str:
    """Excel 경로: 소스 개행(+공백 2칸까지)은 공백 1칸, <br>(+공백 3칸까지)은 CRLF"""
    text = PATTERNS["excel_newline_run"].sub("\x20", inner_html)
    return PATTERNS["excel_br_tag"].sub("\r\n", text)


def inner_html(cell: Tag) -> str:
    """셀 요소의 innerHTML (브라우저 직렬화 규칙)"""
    return cell.decode_contents(formatter=INNER_HTML_FORMATTER)


def cell_span(cell: Tag, attr: str) -> int:
    """rowspan/colspan 속성값. 누락·0·비정상 값은 1, DOM 상한으로 제한."""
    match = re.match(r'\s*(\d+)', cell.get(attr) or "")
    if not match:
        return 1
    limit = MAX_COLSPAN if attr == "colspan" else MAX_ROWSPAN
    return min(max(int(match.group(1)), 1), limit)


def is_excel_generator(soup: BeautifulSoup) -> bool:
    """<meta name="...enerator" content="...Excel..."> 존재 여부"""
    generator = soup.select_one(GENERATOR_META_SELECTOR)
    if generator is None:
        return False
    return bool(PATTERNS["excel_generator"].search(generator.get("content") or ""))
