"""
plugins/rds/metrics.py - RDS 메트릭 카탈로그

엔진/인스턴스 클래스에 따라 적용되는 메트릭은 applicable_when 조건으로 제한합니다.
"""

from core.generators.catalog import metric_factory

metric = metric_factory("AWS/RDS")

MB = 1024 * 1024
GB = 1024 * MB


def _engine(resource) -> str:
    return str(resource.get_property("Engine", "") or "")


def is_burstable(resource) -> bool:
    instance_class = str(resource.get_property("DBInstanceClass", "") or "")
    return instance_class.startswith("db.t3.") or instance_class.startswith("db.t4g.")


def is_aurora(resource) -> bool:
    return _engine(resource).startswith("aurora")


def is_postgresql(resource) -> bool:
    return _engine(resource) == "postgresql"


def is_mysql(resource) -> bool:
    return _engine(resource) == "mysql"


def has_binlog(resource) -> bool:
    return is_mysql(resource) and (resource.get_number("BackupRetentionPeriod") or 0) > 0


def is_read_replica_candidate(resource) -> bool:
    return not resource.get_property("MultiAZ")


METRICS = [
    # 성능
    metric("CPUUtilization", "Percent", "DB 인스턴스 CPU 사용률", "Average", "Performance", "High", 70, 1.0, 1.3),
    metric(
        "CPUCreditUsage", "Count", "CPU 크레딧 사용량 (버스터블 인스턴스)", "Average", "Performance", "Medium",
        20, 1.0, 2.0, applicable_when=is_burstable,
    ),
    metric(
        "CPUCreditBalance", "Count", "CPU 크레딧 잔량 (버스터블 인스턴스)", "Average", "Performance", "Medium",
        30, 1.0, 0.5, applicable_when=is_burstable,
    ),
    metric("DatabaseConnections", "Count", "DB 연결 수", "Average", "Saturation", "High", 20, 1.0, 2.0),
    metric("ReadLatency", "Seconds", "디스크 읽기 평균 지연", "Average", "Latency", "High", 0.02, 1.0, 2.5),
    metric("WriteLatency", "Seconds", "디스크 쓰기 평균 지연", "Average", "Latency", "High", 0.02, 1.0, 2.5),
    metric("ReadThroughput", "Bytes/Second", "디스크 읽기 처리량", "Average", "Performance", "Medium", MB, 10.0, 20.0),
    metric("WriteThroughput", "Bytes/Second", "디스크 쓰기 처리량", "Average", "Performance", "Medium", MB, 10.0, 20.0),
    metric("ReadIOPS", "Count/Second", "초당 읽기 I/O 횟수", "Average", "Performance", "Medium", 100, 10.0, 15.0),
    metric("WriteIOPS", "Count/Second", "초당 쓰기 I/O 횟수", "Average", "Performance", "Medium", 100, 10.0, 15.0),
    # 메모리/스토리지
    metric("FreeableMemory", "Bytes", "사용 가능한 RAM", "Average", "Saturation", "High", 128 * MB, 2.0, 1.0),
    metric("SwapUsage", "Bytes", "스왑 사용량", "Average", "Saturation", "Medium", 0, 1.0, 1000.0),
    metric("FreeStorageSpace", "Bytes", "사용 가능한 스토리지", "Average", "Saturation", "High", 2 * GB, 5.0, 1.0),
    metric(
        "FreeLocalStorage", "Bytes", "Aurora 로컬 스토리지 여유 공간", "Average", "Saturation", "Medium",
        GB, 2.0, 1.0, applicable_when=is_aurora,
    ),
    metric(
        "BinLogDiskUsage", "Bytes", "바이너리 로그 디스크 사용량", "Average", "Saturation", "Medium",
        GB, 1.0, 2.0, applicable_when=has_binlog,
    ),
    metric("DiskQueueDepth", "Count", "디스크 대기 I/O 수", "Average", "Saturation", "Medium", 10, 2.0, 5.0),
    # 복제
    metric(
        "ReplicaLag", "Seconds", "읽기 복제본 지연", "Average", "Latency", "High",
        30, 1.0, 2.0, applicable_when=is_read_replica_candidate,
    ),
    metric(
        "AuroraReplicaLag", "Milliseconds", "Aurora 복제본 지연", "Average", "Latency", "High",
        1000, 1.0, 5.0, applicable_when=is_aurora,
    ),
    # PostgreSQL
    metric(
        "CheckpointLag", "Seconds", "체크포인트 지연", "Average", "Performance", "Medium",
        60, 1.0, 2.0, applicable_when=is_postgresql,
    ),
    metric(
        "MaximumUsedTransactionIDs", "Count", "사용된 최대 트랜잭션 ID", "Maximum", "Saturation", "High",
        1_000_000_000, 1.5, 1.8, applicable_when=is_postgresql,
    ),
    metric(
        "OldestReplicationSlotLag", "Bytes", "가장 오래된 복제 슬롯 지연", "Maximum", "Latency", "Medium",
        GB, 5.0, 10.0, applicable_when=is_postgresql,
    ),
    # 캐시
    metric("BufferCacheHitRatio", "Percent", "버퍼 캐시 적중률", "Average", "Performance", "Medium", 90, 0.95, 0.8),
    metric(
        "ResultSetCacheHitRatio", "Percent", "결과셋 캐시 적중률", "Average", "Performance", "Medium",
        90, 0.9, 0.7, applicable_when=is_mysql,
    ),
    # 오류
    metric("LoginFailures", "Count/Second", "로그인 실패 횟수", "Average", "Error", "High", 1, 1.0, 5.0),
    metric("SelectLatency", "Seconds", "SELECT 쿼리 지연", "Average", "Latency", "Medium", 0.1, 5.0, 20.0),
]
