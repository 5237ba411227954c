"""Result 타입과 Railway 패턴"""
from dataclasses import dataclass
from typing import TypeVar, Generic, Callable, Union

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


# ============================================================
# Result Type (OR Type)
# ============================================================

@dataclass(frozen=True)
class Success(Generic[T]):
    """성공 트랙"""
    value: T

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass(frozen=True)
class Failure(Generic[E]):
    """실패 트랙"""
    error: E

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"


Result = Union[Success[T], Failure[E]]


# ============================================================
# Result 연산 (순수 함수)
# ============================================================

def map_result(
    result: Result[T, E],
    f: Callable[[T], U]
) -> Result[U, E]:
    """Success 값에 함수 적용 (Functor)"""
    match result:
        case Success(value):
            return Success(f(value))
        case Failure() as err:
            return err


def bind(
    result: Result[T, E],
    f: Callable[[T], Result[U, E]]
) -> Result[U, E]:
    """Result 반환 함수 체이닝 (Monad)"""
    match result:
        case Success(value):
            return f(value)
        case Failure() as err:
            return err


def unwrap_or_else(result: Result[T, E], f: Callable[[E], T]) -> T:
    """값 추출 또는 에러로부터 계산"""
    match result:
        case Success(value):
            return value
        case Failure(error):
            return f(error)


# ============================================================
# Railway 파이프라인 빌더
# ============================================================

class Railway(Generic[T, E]):
    """Fluent Railway 파이프라인"""

    def __init__(self, result: Result[T, E]):
        self._result = result

    @classmethod
    def from_result(cls, result: Result[T, E]) -> 'Railway[T, E]':
        """Result에서 생성"""
        return cls(result)

    def map(self, f: Callable[[T], U]) -> 'Railway[U, E]':
        """값 변환"""
        return Railway(map_result(self._result, f))

    def bind(self, f: Callable[[T], Result[U, E]]) -> 'Railway[U, E]':
        """Result 반환 함수 체이닝"""
        return Railway(bind(self._result, f))

    def unwrap(self) -> Result[T, E]:
        """최종 Result 반환"""
        return self._result
