"""
Groth16 엔진
============

R1CS → QAP 변환, 신뢰 설정(trusted setup) 파라미터 샘플링,
snarkjs 호환 키 내보내기와 Solidity 검증 컨트랙트 생성.
"""
