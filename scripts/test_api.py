#!/usr/bin/env python3
"""
# @file purpose: Script di smoke test per il proxy sessioni Anchor

Script manuale per provare un proxy in esecuzione:
- Preflight CORS e metodi non consentiti
- Creazione sessione con preset
- Pausa/ripresa registrazione e terminazione
"""

import asyncio
from typing import Any, Dict, Optional

import httpx


class SessionProxyTester:
    """Tester per il proxy sessioni"""

    def __init__(self, base_url: str = "http://localhost:8000"):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(timeout=30.0)

        # Headers comuni
        self.headers = {"Content-Type": "application/json"}

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()

    async def health_check(self) -> Dict[str, Any]:
        """Test health check"""
        print("🔍 Testing health check...")

        response = await self.client.get(f"{self.base_url}/health")

        if response.status_code == 200:
            result = response.json()
            print(f"✅ Health check OK - API key configured: {result.get('api_key_configured')}")
            return result
        else:
            print(f"❌ Health check failed: {response.status_code}")
            return {}

    async def action(
        self,
        action: str,
        session_id: Optional[str] = None,
        preset: Optional[str] = None
    ) -> httpx.Response:
        """Invia una richiesta action-style"""
        payload: Dict[str, Any] = {"action": action}
        if session_id:
            payload["sessionId"] = session_id
        if preset:
            payload["preset"] = preset

        response = await self.client.post(
            f"{self.base_url}/api/session",
            json=payload,
            headers=self.headers
        )
        print(f"   ➡️ {action}: {response.status_code}")
        return response

    async def test_preflight(self) -> bool:
        print("\n" + "=" * 50)
        print("🧪 TEST: CORS Preflight / Method Not Allowed")
        print("=" * 50)

        preflight = await self.client.options(f"{self.base_url}/api/session")
        put = await self.client.put(f"{self.base_url}/api/session", json={})

        ok = (
            preflight.status_code == 200
            and preflight.headers.get("access-control-allow-origin") is not None
            and put.status_code == 405
        )
        print(f"{'✅' if ok else '❌'} preflight={preflight.status_code} put={put.status_code}")
        return ok

    async def test_session_lifecycle(self, preset: str = "default") -> bool:
        print("\n" + "=" * 50)
        print(f"🧪 TEST: Session Lifecycle (preset: {preset})")
        print("=" * 50)

        created = await self.action("create", preset=preset)
        if not created.is_success:
            print(f"❌ Create failed: {created.text}")
            return False

        body = created.json()
        data = body.get("data", body)
        session_id = data.get("id")
        print(f"✅ Session created: {session_id}")
        if data.get("live_view_url"):
            print(f"   🖥️ Live view: {data['live_view_url']}")

        results = [
            (await self.action("pause", session_id)).is_success,
            (await self.action("resume", session_id)).is_success,
            (await self.action("terminate", session_id)).is_success,
        ]
        return all(results)

    async def test_list(self) -> bool:
        print("\n" + "=" * 50)
        print("🧪 TEST: Sessions Listing")
        print("=" * 50)

        response = await self.client.get(f"{self.base_url}/api/sessions")
        print(f"{'✅' if response.is_success else '❌'} list: {response.status_code}")
        return response.is_success

    async def run_all_tests(self, preset: str = "default"):
        """Esegue tutti i test"""
        print("🧪 ANCHOR SESSION PROXY TESTER")
        print("=" * 50)

        health = await self.health_check()
        if not health:
            print("❌ Health check failed - aborting tests")
            return

        test_results = []
        for name, test in [
            ("Preflight", self.test_preflight),
            ("Session Lifecycle", lambda: self.test_session_lifecycle(preset)),
            ("Sessions Listing", self.test_list),
        ]:
            try:
                test_results.append((name, await test()))
            except httpx.HTTPError as e:
                print(f"❌ {name} test failed: {e}")
                test_results.append((name, False))

        # Risultati finali
        print("\n" + "=" * 50)
        print("📊 TEST RESULTS")
        print("=" * 50)

        passed = sum(1 for _, success in test_results if success)
        for test_name, success in test_results:
            print(f"{'✅ PASS' if success else '❌ FAIL'} {test_name}")

        print(f"\n🎯 Overall: {passed}/{len(test_results)} tests passed")


async def main():
    """Main test function"""
    import argparse

    parser = argparse.ArgumentParser(description="Anchor Session Proxy Tester")
    parser.add_argument("--url", default="http://localhost:8000", help="Proxy base URL")
    parser.add_argument("--preset", default="default", help="Configuration preset for create")
    parser.add_argument("--test", choices=["all", "preflight", "lifecycle", "list"],
                        default="all", help="Test to run")

    args = parser.parse_args()

    async with SessionProxyTester(args.url) as tester:
        if args.test == "all":
            await tester.run_all_tests(args.preset)
        elif args.test == "preflight":
            await tester.test_preflight()
        elif args.test == "lifecycle":
            await tester.test_session_lifecycle(args.preset)
        elif args.test == "list":
            await tester.test_list()


if __name__ == "__main__":
    asyncio.run(main())
