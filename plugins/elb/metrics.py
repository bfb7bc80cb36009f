"""
plugins/elb/metrics.py - Application Load Balancer 메트릭 카탈로그
"""

from core.generators.catalog import metric_factory

metric = metric_factory("AWS/ApplicationELB")

MB = 1024 * 1024

METRICS = [
    metric("RequestCount", "Count", "처리된 요청 수", "Sum", "Performance", "Medium", 1000, 10.0, 50.0),
    metric("NewConnectionCount", "Count", "신규 연결 수", "Sum", "Performance", "Medium", 100, 10.0, 50.0),
    metric("ActiveConnectionCount", "Count", "활성 연결 수", "Average", "Saturation", "Medium", 1000, 5.0, 10.0),
    metric("ProcessedBytes", "Bytes", "처리된 바이트", "Sum", "Performance", "Low", 100 * MB, 100.0, 1000.0),
    metric("ConsumedLCUs", "Count", "사용된 LCU", "Average", "Saturation", "Medium", 100, 10.0, 50.0),
    metric("TargetResponseTime", "Seconds", "타겟 응답 시간", "Average", "Latency", "High", 1.0, 1.0, 3.0),
    metric("HTTPCode_Target_4XX_Count", "Count", "타겟 4XX 응답 수", "Sum", "Error", "High", 10, 1.0, 5.0),
    metric("HTTPCode_Target_5XX_Count", "Count", "타겟 5XX 응답 수", "Sum", "Error", "High", 5, 1.0, 3.0),
    metric("HTTPCode_ELB_4XX_Count", "Count", "로드밸런서 4XX 응답 수", "Sum", "Error", "Medium", 10, 1.0, 5.0),
    metric("HTTPCode_ELB_5XX_Count", "Count", "로드밸런서 5XX 응답 수", "Sum", "Error", "High", 1, 1.0, 10.0),
    metric("UnHealthyHostCount", "Count", "비정상 타겟 수", "Average", "Error", "High", 0, 1.0, 2.0),
    metric("HealthyHostCount", "Count", "정상 타겟 수", "Average", "Performance", "High", 2, 0.5, 0.25),
    metric("RejectedConnectionCount", "Count", "거부된 연결 수", "Sum", "Error", "Medium", 10, 1.0, 5.0),
    metric("TargetConnectionErrorCount", "Count", "타겟 연결 오류 수", "Sum", "Error", "High", 5, 1.0, 3.0),
    metric(
        "TargetTLSNegotiationErrorCount", "Count", "타겟 TLS 협상 오류 수", "Sum", "Error", "Medium", 1, 1.0, 10.0,
    ),
    metric(
        "ClientTLSNegotiationErrorCount", "Count", "클라이언트 TLS 협상 오류 수", "Sum", "Error", "Medium", 1, 1.0, 10.0,
    ),
    metric("RequestCountPerTarget", "Count", "타겟당 요청 수", "Sum", "Performance", "Medium", 100, 10.0, 100.0),
]
