"""HTML 파싱/인코딩 유틸리티"""
