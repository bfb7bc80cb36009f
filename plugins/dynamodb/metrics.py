"""
plugins/dynamodb/metrics.py - DynamoDB 테이블 메트릭 카탈로그
"""

from core.generators.catalog import metric_factory

metric = metric_factory("AWS/DynamoDB")

PROVISIONED_ONLY_METRICS = (
    "MaxProvisionedTableReadCapacityUtilization",
    "MaxProvisionedTableWriteCapacityUtilization",
)


def has_global_secondary_indexes(resource) -> bool:
    indexes = resource.get_property("GlobalSecondaryIndexes")
    return isinstance(indexes, list) and len(indexes) > 0


METRICS = [
    metric("ConsumedReadCapacityUnits", "Count", "소비된 읽기 용량", "Sum", "Saturation", "High", 80, 1.0, 1.25),
    metric("ConsumedWriteCapacityUnits", "Count", "소비된 쓰기 용량", "Sum", "Saturation", "High", 80, 1.0, 1.25),
    metric("ReadThrottles", "Count", "읽기 스로틀 수", "Sum", "Error", "High", 1, 1.0, 10.0),
    metric("WriteThrottles", "Count", "쓰기 스로틀 수", "Sum", "Error", "High", 1, 1.0, 10.0),
    metric("SystemErrors", "Count", "시스템 오류 수", "Sum", "Error", "High", 1, 1.0, 5.0),
    metric("UserErrors", "Count", "사용자 요청 오류 수", "Sum", "Error", "Medium", 10, 1.0, 5.0),
    metric(
        "ConsumedReadCapacityUnits.GlobalSecondaryIndexes", "Count", "GSI 소비 읽기 용량", "Sum", "Saturation", "High",
        80, 1.0, 1.25, applicable_when=has_global_secondary_indexes,
    ),
    metric(
        "ConsumedWriteCapacityUnits.GlobalSecondaryIndexes", "Count", "GSI 소비 쓰기 용량", "Sum", "Saturation", "High",
        80, 1.0, 1.25, applicable_when=has_global_secondary_indexes,
    ),
    metric(
        "ReadThrottles.GlobalSecondaryIndexes", "Count", "GSI 읽기 스로틀 수", "Sum", "Error", "High",
        1, 1.0, 5.0, applicable_when=has_global_secondary_indexes,
    ),
    metric(
        "WriteThrottles.GlobalSecondaryIndexes", "Count", "GSI 쓰기 스로틀 수", "Sum", "Error", "High",
        1, 1.0, 5.0, applicable_when=has_global_secondary_indexes,
    ),
    metric(
        "OnlineIndexThrottleEvents", "Count", "인덱스 생성 중 스로틀 이벤트", "Sum", "Error", "Medium", 1, 1.0, 5.0,
    ),
    metric(
        "SuccessfulRequestLatency", "Milliseconds", "성공 요청 지연", "Average", "Latency", "High", 100, 2.0, 5.0,
    ),
    metric("TransactionConflict", "Count", "트랜잭션 충돌 수", "Sum", "Error", "Medium", 5, 1.0, 5.0),
    metric("PendingReplicationCount", "Count", "대기 중 복제 항목 수", "Average", "Performance", "Medium", 0, 1.0, 100.0),
    metric("AccountMaxReads", "Count", "계정 최대 읽기 용량", "Maximum", "Performance", "Low", 40000, 1.0, 1.25),
    metric("AccountMaxWrites", "Count", "계정 최대 쓰기 용량", "Maximum", "Performance", "Low", 40000, 1.0, 1.25),
    metric(
        "MaxProvisionedTableReadCapacityUtilization", "Percent", "프로비저닝 읽기 용량 최대 사용률", "Maximum",
        "Saturation", "High", 80, 1.0, 1.25,
    ),
    metric(
        "MaxProvisionedTableWriteCapacityUtilization", "Percent", "프로비저닝 쓰기 용량 최대 사용률", "Maximum",
        "Saturation", "High", 80, 1.0, 1.25,
    ),
]
