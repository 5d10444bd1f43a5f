"""
CLI provider for engines accessed via command-line tools.

This is the LLM collaborator of the council pipeline: one subprocess per
call, prompt in, captured stdout out. Uses existing CLI authentication -
no API keys required.
"""

import asyncio
import json
import shutil
import time
from typing import Dict, Optional

from .base import BaseProvider
from ..core.emit import emit
from ..core.errors import LLMInvocationError
from ..core.models import CLIConfig, LLMResponse, LLMRunner

DEFAULT_TIMEOUT = 420  # 7 minutes

# Built-in CLI configurations; council.config.yaml may add or override engines
CLI_CONFIGS = {
    'claude': CLIConfig(
        name='claude',
        args=['--output-format', 'json'],
        use_stdin=False
    ),
    'gemini': CLIConfig(
        name='gemini',
        args=[],
        use_stdin=False
    ),
    'codex': CLIConfig(
        name='codex',
        args=['exec'],
        use_stdin=True
    ),
}


def _cleanup_subprocess(proc) -> None:
    """
    Safely cleanup a subprocess by closing pipes and killing the process.

    Closes stdin/stdout/stderr first to prevent event loop warnings,
    then kills the process.
    """
    if proc is None:
        return
    try:
        if proc.stdin:
            proc.stdin.close()
        if proc.stdout:
            proc.stdout.close()
        if proc.stderr:
            proc.stderr.close()
        proc.kill()
    except (OSError, ProcessLookupError, RuntimeError):
        pass  # Process already exited or loop closing


def resolve_cli_config(engine: str, engines: Optional[Dict[str, CLIConfig]] = None) -> CLIConfig:
    """
    Pick the CLI configuration for an engine.

    Configured engines win over built-ins. Unknown engines run a command of
    the same name with the prompt passed via ``-p``.
    """
    if engines and engine in engines:
        return engines[engine]
    if engine in CLI_CONFIGS:
        return CLI_CONFIGS[engine]
    return CLIConfig(name=engine, args=[], use_stdin=False)


def build_command(config: CLIConfig, prompt: str) -> list[str]:
    """Full argv for one invocation (prompt excluded when it goes to stdin)."""
    cmd = [config.name] + list(config.args)
    if config.use_stdin:
        return cmd
    if config.prompt_flag:
        cmd.append(config.prompt_flag)
    cmd.append(prompt)
    return cmd


class CLIProvider(BaseProvider):
    """
    Provider for engines accessed via command-line tools.

    Uses subprocess to call CLI tools (claude, gemini, codex, ...).
    Authentication is handled by the CLI tools themselves.
    """

    def __init__(self, model_name: str, config: Optional[CLIConfig] = None):
        super().__init__(model_name)
        self._config = config or resolve_cli_config(model_name)

    @property
    def config(self) -> CLIConfig:
        return self._config

    def is_available(self) -> bool:
        """Check if the CLI tool is available in PATH."""
        return shutil.which(self._config.name) is not None

    def _unwrap_output(self, content: str) -> str:
        """Claude's ``--output-format json`` wraps the answer in a ``result`` field."""
        if self._config.name != 'claude' or '--output-format' not in self._config.args:
            return content
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            return content  # Use raw content if not valid JSON
        if isinstance(data, dict) and isinstance(data.get('result'), str):
            return data['result']
        return content

    async def query(self, prompt: str, timeout: int) -> LLMResponse:
        """
        Query the engine via CLI subprocess.

        Args:
            prompt: The prompt to send to the model.
            timeout: Maximum time to wait in seconds.

        Returns:
            LLMResponse with the complete response.
        """
        start = time.time()
        proc = None

        try:
            cmd = build_command(self._config, prompt)

            if self._config.use_stdin:
                proc = await asyncio.create_subprocess_exec(
                    *cmd,
                    stdin=asyncio.subprocess.PIPE,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE
                )
                stdout, stderr = await asyncio.wait_for(
                    proc.communicate(input=prompt.encode('utf-8')),
                    timeout=timeout
                )
            else:
                proc = await asyncio.create_subprocess_exec(
                    *cmd,
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE
                )
                stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)

            if proc.returncode == 0:
                content = self._unwrap_output(stdout.decode('utf-8', errors='replace'))
                return self._create_response(
                    content=content,
                    start_time=start,
                    success=True
                )
            else:
                error = stderr.decode('utf-8', errors='replace').strip() or f'Exit code {proc.returncode}'
                return self._create_error_response(error, start)

        except asyncio.TimeoutError:
            _cleanup_subprocess(proc)
            return self._create_error_response('TIMEOUT', start)
        except Exception as e:
            _cleanup_subprocess(proc)
            return self._create_error_response(str(e), start)


async def run_llm(
    engine: str,
    prompt: str,
    timeout: int = DEFAULT_TIMEOUT,
    engines: Optional[Dict[str, CLIConfig]] = None
) -> str:
    """
    Run one engine on one prompt and return its output text.

    Raises:
        LLMInvocationError: launch failure, non-zero exit, or timeout
    """
    provider = CLIProvider(engine, resolve_cli_config(engine, engines))
    emit({"type": "llm_call", "engine": engine, "command": provider.config.name, "prompt_chars": len(prompt)})

    response = await provider.query(prompt, timeout)
    if not response.success:
        emit({"type": "llm_error", "engine": engine, "error": response.error, "latency_ms": response.latency_ms})
        raise LLMInvocationError(engine, response.error or 'unknown error')

    emit({"type": "llm_complete", "engine": engine, "latency_ms": response.latency_ms})
    return response.content


def make_runner(timeout: int = DEFAULT_TIMEOUT, engines: Optional[Dict[str, CLIConfig]] = None) -> LLMRunner:
    """Bind timeout and engine table into an ``(engine, prompt) -> text`` runner."""
    async def runner(engine: str, prompt: str) -> str:
        return await run_llm(engine, prompt, timeout=timeout, engines=engines)
    return runner
