"""
触发层（Triggers）

webhook 入口把外部请求交给对应的 HookProvider 归一化为 BuildTriggerParams，
并委托 TriggerService 统一完成：逐个触发构建、汇总结果、渲染回提供方响应。
"""
