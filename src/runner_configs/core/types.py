"""도메인 타입 정의 (불변, 검증됨)"""
from typing import Literal, Self, get_args
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# 저장 포맷과 같은 문자열 값을 그대로 사용
Device = Literal[
    "CPU",
    "CPU (rwkv.cpp)",
    "MPS",
    "CUDA",
    "CUDA-Beta",
    "WebGPU",
    "WebGPU (Python)",
    "Custom",
]
Precision = Literal["fp16", "int8", "fp32", "nf4", "Q5_1"]

DEVICES: tuple[Device, ...] = get_args(Device)
PRECISIONS: tuple[Precision, ...] = get_args(Precision)

# 저장 시에는 camelCase 키, 코드에서는 snake_case 필드
RECORD_CONFIG = {
    "frozen": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
    "protected_namespaces": (),
}


class ApiParameters(BaseModel):
    """API 파라미터 (apiPort 외에는 재시작 없이 반영 가능)"""
    api_port: int = Field(default=8000, ge=1, le=65535)
    max_response_token: int = Field(default=4100, ge=100, le=8100)
    temperature: float = Field(default=1.0, ge=0.0, le=2.0)
    top_p: float = Field(default=0.3, ge=0.0, le=1.0)
    presence_penalty: float = Field(default=0.0, ge=-2.0, le=2.0)
    frequency_penalty: float = Field(default=1.0, ge=-2.0, le=2.0)

    model_config = RECORD_CONFIG


class ModelParameters(BaseModel):
    """모델 로딩 파라미터 (변경 시 백엔드 재시작 필요)"""
    model_name: str = "RWKV-4-World-1.5B-v1-fixed-20230612-ctx4096.pth"
    device: Device = "CUDA"
    precision: Precision = "fp16"
    stored_layers: int = 24
    max_stored_layers: int = 24
    custom_strategy: str = ""
    use_custom_cuda: bool = True
    use_custom_tokenizer: bool = False
    custom_tokenizer: str = ""

    model_config = RECORD_CONFIG


class ModelConfig(BaseModel):
    """이름이 붙은 실행 설정 (식별은 컬렉션 내 위치 기준)"""
    name: str
    api_parameters: ApiParameters = Field(default_factory=ApiParameters)
    model_parameters: ModelParameters = Field(default_factory=ModelParameters)
    enable_web_ui: bool = Field(default=True, alias="enableWebUI")

    model_config = RECORD_CONFIG

    def with_api_parameters(self, params: ApiParameters) -> Self:
        return self.model_copy(update={"api_parameters": params})

    def with_model_parameters(self, params: ModelParameters) -> Self:
        return self.model_copy(update={"model_parameters": params})


class LiveParameters(BaseModel):
    """실행 중인 백엔드로 보내는 파라미터 (/update-config 본문)"""
    max_tokens: int
    temperature: float
    top_p: float
    presence_penalty: float
    frequency_penalty: float

    model_config = {"frozen": True}

    @classmethod
    def from_api(cls, params: ApiParameters) -> Self:
        """apiPort를 제외한 핫 리로드 대상만 추출"""
        return cls(
            max_tokens=params.max_response_token,
            temperature=params.temperature,
            top_p=params.top_p,
            presence_penalty=params.presence_penalty,
            frequency_penalty=params.frequency_penalty,
        )
