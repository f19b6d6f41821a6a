from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CoordinatorConfig:
    loading_title: str = "加载中"
    loading_mask: bool = True

    success_title: str = "提交成功"
    fail_title: str = "提交失败"
    toast_duration_ms: int = 1500
    toast_mask: bool = True

    def toast_title(self, failed: bool) -> str:
        return self.fail_title if failed else self.success_title
