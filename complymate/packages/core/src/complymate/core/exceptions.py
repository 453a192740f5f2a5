"""ComplyMATE 异常体系

命令层默认以 CommandResult 返回拒绝原因，不抛异常；
以下异常供需要"失败即抛出"语义的调用方（CLI、目录加载、附件读取）使用。
"""


class ComplyMateError(Exception):
    """ComplyMATE 基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 调用方是否可以直接重试或修正输入后继续
        """
        super().__init__(message)
        self.recoverable = recoverable


class CommandRejectedError(ComplyMateError):
    """命令前置条件不满足（未登录完成任务、Admin 口令错误等）"""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"{command} rejected: {reason}", recoverable=True)
        self.command = command
        self.reason = reason


class DirectoryEmptyError(ComplyMateError):
    """用户目录为空，无法为生成的任务分配负责人"""

    def __init__(self) -> None:
        super().__init__("User directory is empty; cannot assign tasks", recoverable=False)


class AttachmentNotFoundError(ComplyMateError):
    """附件不存在（从未上传、已被替换或会话已重启）"""

    def __init__(self, attachment_id: str) -> None:
        super().__init__(f"Attachment {attachment_id} does not exist", recoverable=False)
        self.attachment_id = attachment_id
