"""
core/generators/registry.py - 리소스 타입 → 생성기 레지스트리

생성기 인스턴스에 지원 타입을 물어 타입 식별자별로 색인합니다.
분석 시작 전에 한 번 구성되며, 분석 중에는 읽기 전용입니다.

내장 생성기는 plugins/<service> 패키지의 GENERATOR 속성으로 발견됩니다.

Usage:
    from core.generators.registry import build_default_registry

    registry = build_default_registry()
    generator = registry.lookup("AWS::RDS::DBInstance")
"""

from __future__ import annotations

import importlib
import logging

from .base import MetricsGenerator

logger = logging.getLogger(__name__)

# 내장 생성기 플러그인 (등록 순서)
BUILTIN_PLUGINS = ("rds", "fn", "ecs", "elb", "dynamodb", "apigateway")


class GeneratorRegistry:
    """리소스 타입 식별자 → 생성기 매핑

    같은 타입이 여러 번 등록되면 마지막 등록이 우선합니다.
    """

    def __init__(self) -> None:
        self._generators: dict[str, MetricsGenerator] = {}
        self._instances: list[MetricsGenerator] = []

    def register(self, generator: MetricsGenerator) -> None:
        for resource_type in generator.get_supported_types():
            self._generators[resource_type] = generator
        if generator not in self._instances:
            self._instances.append(generator)
        logger.debug(f"생성기 등록: {type(generator).__name__} ({', '.join(generator.get_supported_types())})")

    def lookup(self, resource_type: str) -> MetricsGenerator | None:
        return self._generators.get(resource_type)

    def __contains__(self, resource_type: object) -> bool:
        return resource_type in self._generators

    def __len__(self) -> int:
        return len(self._generators)

    def supported_types(self) -> list[str]:
        return list(self._generators)

    def generator_names(self) -> list[str]:
        """등록된 생성기 클래스 이름 (등록 순서, 중복 제거)"""
        names: list[str] = []
        for generator in self._instances:
            name = type(generator).__name__
            if name not in names:
                names.append(name)
        return names


def load_builtin_generators() -> list[MetricsGenerator]:
    """plugins/<service>.GENERATOR 클래스를 인스턴스화"""
    generators = []
    for plugin in BUILTIN_PLUGINS:
        module = importlib.import_module(f"plugins.{plugin}")
        generator_cls = module.GENERATOR
        generators.append(generator_cls())
    return generators


def build_default_registry() -> GeneratorRegistry:
    registry = GeneratorRegistry()
    for generator in load_builtin_generators():
        registry.register(generator)
    logger.debug(f"생성기 레지스트리 구성 완료: {len(registry)}개 타입")
    return registry
