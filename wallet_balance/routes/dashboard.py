from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

MASK = "••••••"

DASHBOARD_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Trading Wallet</title>
<style>
  body { margin: 0; min-height: 100vh; font-family: system-ui, sans-serif; color: #fff;
         background: linear-gradient(135deg, #0f172a, #1e3a8a, #0f172a); }
  main { max-width: 28rem; margin: 0 auto; padding: 2rem 1rem; }
  h1 { text-align: center; margin-bottom: .25rem; }
  .sub { text-align: center; color: #9ca3af; margin-top: 0; }
  .card { background: #1e293b; border: 1px solid #334155; border-radius: .75rem; padding: 1rem; margin-bottom: 1.5rem; }
  .row { display: flex; justify-content: space-between; align-items: center; }
  .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 1rem; margin-top: 1rem; }
  .tile { background: #334155; border-radius: .5rem; padding: 1rem; }
  .hero { background: linear-gradient(90deg, #2563eb, #9333ea); border-radius: .5rem; padding: 1rem; }
  .label { color: #9ca3af; font-size: .875rem; }
  .big { font-size: 1.875rem; font-weight: 700; }
  .ok { color: #4ade80; } .bad { color: #f87171; }
  .error { background: rgba(127, 29, 29, .3); border: 1px solid #b91c1c; border-radius: .5rem; padding: .75rem; color: #fca5a5; }
  .hidden { display: none; }
  button { background: none; border: 0; color: #60a5fa; cursor: pointer; font-size: 1rem; }
  button:disabled { opacity: .5; }
  ul { list-style: none; padding: 0; margin: 0; }
  li { display: flex; justify-content: space-between; padding: .5rem 0; border-bottom: 1px solid #475569; }
  small { color: #9ca3af; }
</style>
</head>
<body>
<main>
  <h1>Trading Wallet</h1>
  <p class="sub">Real-time balance tracking</p>

  <section class="card row">
    <strong>Server Status</strong>
    <span id="status" class="bad">Disconnected</span>
  </section>

  <section id="wallet" class="card hidden">
    <div class="row">
      <h2>Account Balance</h2>
      <div>
        <button id="toggle" title="Show/hide balances">Hide</button>
        <button id="refresh" title="Refresh">Refresh</button>
      </div>
    </div>
    <div id="error" class="error hidden"></div>
    <div id="balance" class="hidden">
      <div class="hero">
        <div class="label">Total Balance</div>
        <div class="big" data-amount="total"></div>
        <div id="btc" class="hidden"><small data-btc></small></div>
      </div>
      <div class="grid">
        <div class="tile"><div class="label">Available</div><div data-amount="available"></div></div>
        <div class="tile"><div class="label">In Orders</div><div data-amount="inOrders"></div></div>
      </div>
      <div class="tile" style="margin-top:1rem">
        <div class="label">Your Assets</div>
        <ul id="assets"></ul>
      </div>
      <div class="grid">
        <div class="tile"><div class="label">Open Orders</div><div id="orders">-</div></div>
        <div class="tile"><div class="label">Maker / Taker</div><div id="fees">-</div></div>
      </div>
      <p class="sub" id="updated"></p>
    </div>
  </section>
</main>
<script>
const MASK = "__MASK__";
let showBalance = true;
let connected = false;
let balance = null;

const $ = (id) => document.getElementById(id);

function formatCurrency(amount) {
  const currency = (balance && balance.currency) || "USDT";
  const code = currency === "USDT" || currency === "BUSD" ? "USD" : currency;
  try {
    return new Intl.NumberFormat("en-US", { style: "currency", currency: code, minimumFractionDigits: 2 }).format(amount);
  } catch (e) {
    return amount.toFixed(2) + " " + currency;
  }
}

function mask(text) { return showBalance ? text : MASK; }

function render() {
  if (!balance) return;
  document.querySelectorAll("[data-amount]").forEach((el) => {
    el.textContent = mask(formatCurrency(balance[el.dataset.amount] || 0));
  });
  const btc = $("btc");
  if (balance.btcEquivalent) {
    btc.classList.remove("hidden");
    btc.querySelector("[data-btc]").textContent = mask("≈ " + balance.btcEquivalent + " BTC");
  } else {
    btc.classList.add("hidden");
  }
  const list = $("assets");
  list.innerHTML = "";
  (balance.perAsset || [])
    .filter((a) => a.quoteValue > 1)
    .sort((a, b) => b.quoteValue - a.quoteValue)
    .slice(0, 5)
    .forEach((a) => {
      const li = document.createElement("li");
      const amount = a.total >= 1 ? a.total.toFixed(4) : a.total.toFixed(8);
      const share = balance.total ? ((a.quoteValue / balance.total) * 100).toFixed(1) + "%" : "-";
      li.innerHTML = "<span><strong></strong><br><small></small></span><span style='text-align:right'><span></span><br><small></small></span>";
      li.querySelector("strong").textContent = a.asset;
      li.querySelectorAll("small")[0].textContent = mask(amount);
      li.querySelector("span > span").textContent = mask(formatCurrency(a.quoteValue));
      li.querySelectorAll("small")[1].textContent = showBalance ? share : "••••";
      list.appendChild(li);
    });
  $("updated").textContent = "Last updated: " + new Date().toLocaleTimeString() +
    (balance.exchangeTimestamp ? " | Exchange time: " + new Date(balance.exchangeTimestamp).toLocaleTimeString() : "");
  $("balance").classList.remove("hidden");
}

async function getJson(url) {
  const response = await fetch(url, { headers: { "Content-Type": "application/json" } });
  const data = await response.json();
  if (!response.ok) throw new Error(data.error || "HTTP error! status: " + response.status);
  return data;
}

async function fetchWalletBalance() {
  $("refresh").disabled = true;
  $("error").classList.add("hidden");
  try {
    balance = await getJson("/api/wallet/balance");
    render();
    fetchExtras();
  } catch (err) {
    $("error").textContent = "Failed to fetch wallet balance: " + err.message;
    $("error").classList.remove("hidden");
  } finally {
    $("refresh").disabled = false;
  }
}

async function fetchExtras() {
  try {
    const orders = await getJson("/api/wallet/orders");
    $("orders").textContent = orders.count;
  } catch (err) {
    $("orders").textContent = "-";
  }
  try {
    const fees = await getJson("/api/wallet/fees");
    $("fees").textContent = (fees.makerCommission * 100).toFixed(2) + "% / " + (fees.takerCommission * 100).toFixed(2) + "%";
  } catch (err) {
    $("fees").textContent = "-";
  }
}

async function checkConnection() {
  let ok = false;
  try {
    ok = (await fetch("/api/health")).ok;
  } catch (err) {
    ok = false;
  }
  const wasConnected = connected;
  connected = ok;
  $("status").textContent = ok ? "Connected" : "Disconnected";
  $("status").className = ok ? "ok" : "bad";
  $("wallet").classList.toggle("hidden", !ok);
  if (ok && !wasConnected) fetchWalletBalance();
}

$("toggle").addEventListener("click", () => {
  showBalance = !showBalance;
  $("toggle").textContent = showBalance ? "Hide" : "Show";
  render();
});
$("refresh").addEventListener("click", fetchWalletBalance);

checkConnection();
setInterval(() => {
  checkConnection();
  if (connected) fetchWalletBalance();
}, 30000);
</script>
</body>
</html>
""".replace("__MASK__", MASK)


@router.get("/", response_class=HTMLResponse)
async def get_dashboard():
    return HTMLResponse(content=DASHBOARD_HTML)
