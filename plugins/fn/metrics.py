"""
plugins/fn/metrics.py - Lambda 메트릭 카탈로그
"""

from core.generators.catalog import metric_factory

metric = metric_factory("AWS/Lambda")

METRICS = [
    metric("Duration", "Milliseconds", "함수 실행 시간", "Average", "Performance", "High", 5000, 0.8, 1.0),
    metric("Invocations", "Count", "함수 호출 수", "Sum", "Performance", "Medium", 1000, 10.0, 20.0),
    metric("Errors", "Count", "함수 실행 오류 수", "Sum", "Error", "High", 5, 1.0, 2.0),
    metric("DeadLetterErrors", "Count", "DLQ 전송 실패 수", "Sum", "Error", "High", 1, 1.0, 5.0),
    metric("DestinationDeliveryFailures", "Count", "비동기 대상 전송 실패 수", "Sum", "Error", "Medium", 1, 1.0, 10.0),
    metric("Throttles", "Count", "스로틀된 호출 수", "Sum", "Saturation", "High", 1, 1.0, 5.0),
    metric("ConcurrentExecutions", "Count", "동시 실행 수", "Maximum", "Saturation", "High", 100, 0.8, 1.0),
    metric(
        "UnreservedConcurrentExecutions", "Count", "예약되지 않은 동시 실행 수", "Maximum", "Saturation", "Medium",
        900, 0.8, 0.9,
    ),
    metric(
        "ProvisionedConcurrencyInvocations", "Count", "프로비저닝된 동시성 호출 수", "Sum", "Performance", "Medium",
        100, 10.0, 50.0,
    ),
    metric(
        "ProvisionedConcurrencyUtilization", "Percent", "프로비저닝된 동시성 사용률", "Maximum", "Saturation", "Medium",
        80, 1.0, 1.25,
    ),
    metric(
        "ProvisionedConcurrencySpilloverInvocations", "Count", "프로비저닝 동시성 초과 호출 수", "Sum", "Saturation",
        "Medium", 10, 1.0, 10.0,
    ),
    metric("IteratorAge", "Milliseconds", "스트림 이벤트 처리 지연", "Maximum", "Latency", "Medium", 60000, 5.0, 10.0),
    metric("InitDuration", "Milliseconds", "콜드 스타트 초기화 시간", "Average", "Performance", "Medium", 3000, 1.0, 2.0),
    metric(
        "PostRuntimeExtensionsDuration", "Milliseconds", "런타임 이후 확장 실행 시간", "Average", "Performance", "Low",
        1000, 2.0, 5.0,
    ),
    metric("AsyncEventAge", "Milliseconds", "비동기 이벤트 대기 시간", "Average", "Latency", "Medium", 60000, 5.0, 10.0),
    metric(
        "ClaimedAccountConcurrency", "Count", "계정 동시성 점유량", "Maximum", "Saturation", "Low", 800, 1.0, 1.25,
    ),
]
