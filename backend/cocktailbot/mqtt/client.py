# cocktailbot/mqtt/client.py

from __future__ import annotations

import asyncio
import json
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

import paho.mqtt.client as mqtt

log = logging.getLogger(__name__)


class CocktailBotMqttClient:
    """Publishes pump/LED commands to the controller bridge.

    Topics (prefix defaults to `cocktailbot`):
      <prefix>/cmd/pump   server -> bridge  {"pin": 17, "duration_ms": 2000}
      <prefix>/cmd/led    server -> bridge  {"cmd": "COLOR 255 0 0"}
      <prefix>/event/#    bridge -> server  forwarded to `on_event`
    """

    def __init__(
        self,
        host: str,
        port: int,
        client_id: str = "cocktailbot-backend",
        topic_prefix: str = "cocktailbot",
        on_event: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> None:
        self.host = host
        self.port = port
        self.topic_prefix = topic_prefix.rstrip("/")
        self.on_event = on_event

        self.client = mqtt.Client(
            mqtt.CallbackAPIVersion.VERSION2, client_id=client_id, clean_session=True
        )
        self.client.on_connect = self._on_connect
        self.client.on_message = self._on_message

    @property
    def topic_pump(self) -> str:
        return f"{self.topic_prefix}/cmd/pump"

    @property
    def topic_led(self) -> str:
        return f"{self.topic_prefix}/cmd/led"

    @property
    def topic_events(self) -> str:
        return f"{self.topic_prefix}/event/#"

    # ========== start ==========

    def start(self) -> None:
        log.info("[MQTT] connecting to %s:%s", self.host, self.port)
        self.client.connect(self.host, self.port, keepalive=60)

        t = threading.Thread(target=self.client.loop_forever, daemon=True)
        t.start()
        log.info("[MQTT] loop thread started")

    def stop(self) -> None:
        self.client.disconnect()

    # ========== callbacks ==========

    def _on_connect(self, client, userdata, flags, reason_code, properties=None):
        log.info("[MQTT] connected rc=%s", reason_code)
        client.subscribe(self.topic_events, qos=1)

    def _on_message(self, client, userdata, msg):
        try:
            payload_str = msg.payload.decode("utf-8")
            data = json.loads(payload_str) if payload_str else {}
        except Exception as e:
            log.warning("[MQTT] payload decode error on %s: %r", msg.topic, e)
            return

        log.debug("[MQTT] recv topic=%s payload=%s", msg.topic, data)
        if self.on_event is not None:
            self.on_event({
                "type": "controller_event",
                "ts": int(time.time()),
                "data": {"topic": msg.topic, "payload": data},
            })

    # ========== publish helpers ==========

    def publish(self, topic: str, payload: Dict[str, Any]) -> None:
        data_str = json.dumps(payload, ensure_ascii=False)
        log.debug("[MQTT] publish -> %s: %s", topic, data_str)
        info = self.client.publish(topic, data_str, qos=1, retain=False)
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            raise ConnectionError(f"MQTT publish to {topic} failed rc={info.rc}")

    def publish_pump_command(self, pin: int, duration_ms: int) -> None:
        self.publish(self.topic_pump, {"pin": pin, "duration_ms": duration_ms})

    def publish_led_command(self, *tokens: str) -> None:
        self.publish(self.topic_led, {"cmd": " ".join(tokens)})


class MqttPumpDriver:
    """Fire the pulse over MQTT and wait out its duration locally."""

    def __init__(self, client: CocktailBotMqttClient) -> None:
        self.client = client

    async def pulse(self, pin: int, duration_ms: int) -> None:
        self.client.publish_pump_command(pin, duration_ms)
        await asyncio.sleep(duration_ms / 1000.0)


class MqttLightingDriver:
    def __init__(self, client: CocktailBotMqttClient) -> None:
        self.client = client

    async def send(self, *tokens: str) -> None:
        self.client.publish_led_command(*tokens)
