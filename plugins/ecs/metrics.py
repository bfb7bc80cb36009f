"""
plugins/ecs/metrics.py - ECS(Fargate) 서비스 메트릭 카탈로그
"""

from core.generators.catalog import metric_factory

metric = metric_factory("AWS/ECS")

MB = 1024 * 1024

GPU_METRICS = ("GPUUtilization", "GPUMemoryUtilization")
TASK_COUNT_METRICS = ("TaskCount", "RunningCount", "PendingCount")

METRICS = [
    metric("CPUUtilization", "Percent", "서비스 CPU 사용률", "Average", "Performance", "High", 70, 1.0, 1.3),
    metric("MemoryUtilization", "Percent", "서비스 메모리 사용률", "Average", "Performance", "High", 80, 1.0, 1.125),
    metric("CPUReservation", "Percent", "CPU 예약률", "Average", "Saturation", "Medium", 70, 1.0, 1.2),
    metric("MemoryReservation", "Percent", "메모리 예약률", "Average", "Saturation", "Medium", 70, 1.0, 1.2),
    metric(
        "EphemeralStorageUtilization", "Percent", "임시 스토리지 사용률", "Average", "Saturation", "Medium",
        80, 1.0, 1.125,
    ),
    metric("TaskCount", "Count", "실행 중 태스크 수", "Average", "Performance", "Medium", 1, 0.5, 0.1),
    metric("RunningCount", "Count", "RUNNING 상태 태스크 수", "Average", "Performance", "High", 1, 0.5, 0.1),
    metric("PendingCount", "Count", "PENDING 상태 태스크 수", "Average", "Performance", "Medium", 0, 1.0, 10.0),
    metric("DesiredCount", "Count", "목표 태스크 수", "Average", "Performance", "Low", 2, 5.0, 10.0),
    metric("NetworkRxBytes", "Bytes", "수신 네트워크 바이트", "Sum", "Performance", "Low", 10 * MB, 100.0, 1000.0),
    metric("NetworkTxBytes", "Bytes", "송신 네트워크 바이트", "Sum", "Performance", "Low", 10 * MB, 100.0, 1000.0),
    metric("StorageReadBytes", "Bytes", "스토리지 읽기 바이트", "Sum", "Performance", "Low", 100 * MB, 10.0, 50.0),
    metric("StorageWriteBytes", "Bytes", "스토리지 쓰기 바이트", "Sum", "Performance", "Low", 100 * MB, 10.0, 50.0),
    metric("GPUUtilization", "Percent", "GPU 사용률", "Average", "Performance", "Medium", 70, 1.0, 1.3),
    metric("GPUMemoryUtilization", "Percent", "GPU 메모리 사용률", "Average", "Performance", "Medium", 80, 1.0, 1.125),
]
