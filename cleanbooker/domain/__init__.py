"""Pure booking rules: pricing, status lifecycle and list criteria."""
