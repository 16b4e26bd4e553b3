"""统一错误分类：所有文件系统与外部依赖错误在各操作边界被映射为以下几类之一。

- NotFound：资产/分片/播放列表不存在，404，不作为错误记录
- BadInput：上传表单不合法或缺少必填字段，400
- DependencyUnavailable：外部编码器（ffmpeg）不存在，500
- EncodeFailure：编码器执行失败，500，日志中附带编码器输出
- StorageFailure：读写/列目录的 I/O 错误，500

对外消息（message）不包含内部路径；路径只写入日志。
"""
from __future__ import annotations


class VideoBackendError(Exception):
    """所有业务错误的基类，携带 HTTP 状态码与对外可见的消息。"""

    status_code: int = 500
    message: str = "服务器内部错误"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFound(VideoBackendError):
    status_code = 404
    message = "资源不存在"


class BadInput(VideoBackendError):
    status_code = 400
    message = "请求参数不合法"


class DependencyUnavailable(VideoBackendError):
    status_code = 500
    message = "外部依赖不可用"


class EncodeFailure(VideoBackendError):
    """编码器运行但失败；output 为合并后的 stdout/stderr，仅用于日志。"""

    status_code = 500
    message = "视频转换为 HLS 失败"

    def __init__(self, message: str | None = None, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class StorageFailure(VideoBackendError):
    status_code = 500
    message = "存储读写失败"
