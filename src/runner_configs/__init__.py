"""Runner Configs - 로컬 추론 백엔드 실행 설정 관리"""

__version__ = "0.1.0"
