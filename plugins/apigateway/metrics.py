"""
plugins/apigateway/metrics.py - API Gateway REST API 메트릭 카탈로그
"""

from core.generators.catalog import metric_factory

metric = metric_factory("AWS/ApiGateway")

MB = 1024 * 1024

METRICS = [
    metric("Count", "Count", "API 요청 수", "Sum", "Performance", "Medium", 1000, 10.0, 100.0),
    metric("4XXError", "Count", "클라이언트 오류(4XX) 수", "Sum", "Error", "High", 10, 1.0, 5.0),
    metric("5XXError", "Count", "서버 오류(5XX) 수", "Sum", "Error", "High", 1, 1.0, 10.0),
    metric("Latency", "Milliseconds", "요청 전체 지연", "Average", "Latency", "High", 1000, 1.0, 3.0),
    metric("IntegrationLatency", "Milliseconds", "백엔드 통합 지연", "Average", "Latency", "High", 500, 1.0, 6.0),
    metric("CacheHitCount", "Count", "API 캐시 적중 수", "Sum", "Performance", "Low", 100, 0.1, 0.01),
    metric("CacheMissCount", "Count", "API 캐시 미스 수", "Sum", "Performance", "Low", 100, 10.0, 100.0),
    metric("DataProcessed", "Bytes", "처리된 데이터량", "Sum", "Performance", "Low", 10 * MB, 100.0, 1000.0),
    metric("ThrottleCount", "Count", "스로틀된 요청 수", "Sum", "Error", "High", 1, 1.0, 10.0),
    metric("ExecutionError", "Count", "실행 오류 수", "Sum", "Error", "High", 1, 1.0, 5.0),
    metric("ClientError", "Count", "클라이언트 오류 수", "Sum", "Error", "Medium", 10, 1.0, 5.0),
    metric("ServerError", "Count", "서버 오류 수", "Sum", "Error", "High", 1, 1.0, 10.0),
    metric("ResponseSize", "Bytes", "평균 응답 크기", "Average", "Performance", "Low", MB, 5.0, 10.0),
]
